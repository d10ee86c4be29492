# backend/flipbook/models/legacy.py
"""Pre-block storage layout: one row per text item, keyed by a page slug.

Kept on its own metadata so ``Base.metadata.create_all`` never creates it;
it is only read when migrating an existing database.
"""
from sqlalchemy import Column, Integer, MetaData, Table, Text, DateTime
from sqlalchemy.sql import func

legacy_metadata = MetaData()

page_items = Table(
    "page_items",
    legacy_metadata,
    Column("id", Integer, primary_key=True),
    Column("page_key", Text, nullable=False),
    Column("content", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)
