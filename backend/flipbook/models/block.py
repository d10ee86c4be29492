# backend/flipbook/models/block.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class BlockType(str, enum.Enum):
    TEXT = "text"
    IMAGE = "image"


class Block(Base):
    __tablename__ = "page_blocks"
    __table_args__ = (
        CheckConstraint("block_type IN ('text', 'image')", name="ck_page_blocks_block_type"),
        Index("idx_page_blocks_page_id_sort_order", "page_id", "sort_order", "id"),
    )

    id = Column(Integer, primary_key=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), nullable=False)
    block_type = Column(String(16), nullable=False)
    content = Column(Text, nullable=False)  # Literal text, or an image URL
    sort_order = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )

    page = relationship("Page", back_populates="blocks")
