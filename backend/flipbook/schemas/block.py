# backend/flipbook/schemas/block.py
from typing import Any

from pydantic import field_validator

from .base import BaseSchema, TimestampMixin, coerce_text


class BlockWrite(BaseSchema):
    """Body of block create and update requests.

    ``block_type`` and ``content`` are always replaced; ``sort_order`` is only
    applied on update, and only when it holds an integer.
    """
    block_type: str = ""
    content: str = ""
    sort_order: Any = None

    @field_validator("block_type", "content", mode="before")
    @classmethod
    def trim_text(cls, v: Any) -> str:
        return coerce_text(v, falsy_as_empty=True)


class Block(TimestampMixin):
    id: int
    page_id: int
    block_type: str
    content: str
    sort_order: int
