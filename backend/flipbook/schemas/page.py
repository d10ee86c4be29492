# backend/flipbook/schemas/page.py
from typing import Any, Optional

from pydantic import field_validator

from .base import BaseSchema, TimestampMixin, coerce_text


class PageCreate(BaseSchema):
    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def trim_title(cls, v: Any) -> str:
        return coerce_text(v)


class PageUpdate(BaseSchema):
    """Partial update; only fields present in the request are applied"""
    title: Optional[str] = None
    sort_order: Any = None

    @field_validator("title", mode="before")
    @classmethod
    def trim_title(cls, v: Any) -> str:
        return coerce_text(v)


class Page(TimestampMixin):
    id: int
    title: str
    sort_order: int
