# backend/flipbook/services/blocks.py
from typing import List

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ..errors import InvalidInput, NotFound
from ..models import Block, BlockType
from ..schemas.block import BlockWrite
from ..utils.logging import service_logger
from ..utils.validation import coerce_sort_order

BLOCK_TYPES = {block_type.value for block_type in BlockType}


def validate_block(data: BlockWrite) -> None:
    if data.block_type not in BLOCK_TYPES:
        raise InvalidInput("blockType must be 'text' or 'image'")
    if not data.content:
        raise InvalidInput("content is required")


def next_block_sort_order(db: Session, page_id: int) -> int:
    # Same race as pages: concurrent creates may share a value
    current_max = db.query(func.coalesce(func.max(Block.sort_order), 0)) \
        .filter(Block.page_id == page_id) \
        .scalar()
    return int(current_max) + 1


class BlockService:
    def __init__(self, db: Session):
        self.db = db

    def list(self, page_id: int) -> List[Block]:
        return self.db.query(Block) \
            .filter(Block.page_id == page_id) \
            .order_by(Block.sort_order.asc(), Block.id.asc()) \
            .all()

    def get(self, page_id: int, block_id: int) -> Block:
        block = self.db.query(Block) \
            .filter(Block.id == block_id, Block.page_id == page_id) \
            .first()
        if not block:
            raise NotFound("block not found")
        return block

    def create(self, page_id: int, data: BlockWrite) -> Block:
        validate_block(data)

        block = Block(
            page_id=page_id,
            block_type=data.block_type,
            content=data.content,
            sort_order=next_block_sort_order(self.db, page_id)
        )
        self.db.add(block)
        self.db.commit()
        self.db.refresh(block)
        service_logger.info(
            "Created block",
            extra={"page_id": page_id, "block_id": block.id, "sort_order": block.sort_order}
        )
        return block

    def update(self, page_id: int, block_id: int, data: BlockWrite) -> Block:
        validate_block(data)
        block = self.get(page_id, block_id)

        block.block_type = data.block_type
        block.content = data.content
        sort_order = coerce_sort_order(data.sort_order)
        if sort_order is not None:
            block.sort_order = sort_order
        block.updated_at = func.now()

        self.db.commit()
        self.db.refresh(block)
        return block

    def delete(self, page_id: int, block_id: int) -> None:
        block = self.get(page_id, block_id)
        self.db.delete(block)
        self.db.commit()
        service_logger.info("Deleted block", extra={"page_id": page_id, "block_id": block_id})
