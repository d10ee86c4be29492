# backend/flipbook/services/pages.py
from typing import List

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ..errors import NotFound
from ..models import Page
from ..schemas.page import PageCreate, PageUpdate
from ..utils.logging import service_logger
from ..utils.validation import coerce_sort_order


def next_page_sort_order(db: Session) -> int:
    # Not isolated from concurrent creates; two pages may share a value
    current_max = db.query(func.coalesce(func.max(Page.sort_order), 0)).scalar()
    return int(current_max) + 1


class PageService:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Page]:
        return self.db.query(Page).order_by(Page.sort_order.asc(), Page.id.asc()).all()

    def get(self, page_id: int) -> Page:
        page = self.db.query(Page).filter(Page.id == page_id).first()
        if not page:
            raise NotFound("page not found")
        return page

    def create(self, data: PageCreate) -> Page:
        page = Page(title=data.title, sort_order=next_page_sort_order(self.db))
        self.db.add(page)
        self.db.commit()
        self.db.refresh(page)
        service_logger.info("Created page", extra={"page_id": page.id, "sort_order": page.sort_order})
        return page

    def update(self, page_id: int, data: PageUpdate) -> Page:
        page = self.get(page_id)

        provided = data.model_fields_set
        if "title" in provided:
            page.title = data.title or ""
        if "sort_order" in provided:
            sort_order = coerce_sort_order(data.sort_order)
            if sort_order is not None:
                page.sort_order = sort_order
        page.updated_at = func.now()

        self.db.commit()
        self.db.refresh(page)
        return page

    def delete(self, page_id: int) -> None:
        page = self.get(page_id)
        self.db.delete(page)
        self.db.commit()
        service_logger.info("Deleted page", extra={"page_id": page_id})
