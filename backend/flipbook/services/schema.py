# backend/flipbook/services/schema.py
from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session

from ..database import Base, Store
from ..models import Block, BlockType, Page, page_items
from ..utils.logging import service_logger

DEFAULT_PAGE_TITLES = ["Page 1", "Page 2", "Page 3", "The End"]


class SchemaService:
    """Creates the schema, migrates legacy items and seeds default pages"""

    def __init__(self, store: Store):
        self.store = store

    def initialize(self) -> None:
        """Bring the database up to the current layout.

        Safe to run on every start. Errors propagate so a broken database
        stops the process before it serves traffic.
        """
        service_logger.info("Ensuring database schema")
        Base.metadata.create_all(bind=self.store.engine)

        db = self.store.session()
        try:
            if self.has_legacy_table():
                self.migrate_legacy_items(db)
            self.seed_default_pages(db)
        except Exception:
            db.rollback()
            service_logger.critical("Database initialization failed", exc_info=True)
            raise
        finally:
            db.close()

    def has_legacy_table(self) -> bool:
        return inspect(self.store.engine).has_table(page_items.name)

    def migrate_legacy_items(self, db: Session) -> int:
        """Turn legacy page items into pages with text blocks.

        Runs only while ``page_blocks`` is empty. Returns the number of pages
        created.
        """
        block_count = db.query(func.count(Block.id)).scalar()
        if block_count:
            service_logger.debug("Blocks already present, skipping legacy migration",
                                 extra={"block_count": block_count})
            return 0

        first_created = func.min(page_items.c.created_at).label("created_first")
        groups = db.execute(
            select(page_items.c.page_key, first_created)
            .group_by(page_items.c.page_key)
            .order_by(first_created.asc())
        ).all()

        for position, group in enumerate(groups, start=1):
            title = (group.page_key or "").replace("-", " ")
            page = Page(title=title or f"Page {position}", sort_order=position)
            db.add(page)
            db.flush()

            items = db.execute(
                select(page_items.c.content, page_items.c.created_at)
                .where(page_items.c.page_key == group.page_key)
                .order_by(page_items.c.created_at.asc(), page_items.c.id.asc())
            ).all()

            for item_position, item in enumerate(items, start=1):
                db.add(Block(
                    page_id=page.id,
                    block_type=BlockType.TEXT.value,
                    content=item.content,
                    sort_order=item_position,
                    created_at=item.created_at,
                    updated_at=item.created_at
                ))

            service_logger.info(
                f"Migrated legacy page '{group.page_key}'",
                extra={"page_id": page.id, "item_count": len(items)}
            )

        db.commit()
        return len(groups)

    def seed_default_pages(self, db: Session) -> bool:
        """Insert the default pages into an empty ``pages`` table"""
        if db.query(func.count(Page.id)).scalar():
            return False

        for position, title in enumerate(DEFAULT_PAGE_TITLES, start=1):
            db.add(Page(title=title, sort_order=position))
        db.commit()

        service_logger.info("Seeded default pages", extra={"page_count": len(DEFAULT_PAGE_TITLES)})
        return True
