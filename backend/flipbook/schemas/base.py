# backend/flipbook/schemas/base.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Snake case in Python, camelCase on the wire"""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True
    )


class TimestampMixin(BaseSchema):
    created_at: datetime
    updated_at: datetime


def coerce_text(value: Any, falsy_as_empty: bool = False) -> str:
    """Stringify and trim a loosely typed JSON value; null becomes ''.

    With ``falsy_as_empty``, any falsy value (0, false, [], {}) also becomes ''.
    """
    if value is None or (falsy_as_empty and not value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()
