# backend/flipbook/api/blocks.py
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.block import Block as BlockSchema, BlockWrite
from ..services.blocks import BlockService
from ..utils.logging import api_logger
from ..utils.validation import parse_positive_id

router = APIRouter(prefix="/api/pages/{page_id}/blocks", tags=["blocks"])


def get_block_service(db: Session = Depends(get_db)) -> BlockService:
    return BlockService(db)


def parse_block_ids(page_id: str, block_id: str):
    return parse_positive_id(page_id, "invalid id"), parse_positive_id(block_id, "invalid id")


@router.get("", response_model=List[BlockSchema])
async def list_blocks(page_id: str, service: BlockService = Depends(get_block_service)):
    page_id = parse_positive_id(page_id, "invalid page id")
    api_logger.debug(f"Fetching blocks for page {page_id}", extra={"page_id": page_id})
    return service.list(page_id)


@router.post("", response_model=BlockSchema, status_code=status.HTTP_201_CREATED)
async def create_block(
        page_id: str,
        block_data: Optional[BlockWrite] = Body(None),
        service: BlockService = Depends(get_block_service)
):
    page_id = parse_positive_id(page_id, "invalid page id")
    block = service.create(page_id, block_data or BlockWrite())

    api_logger.info(
        f"Block {block.id} created",
        extra={"page_id": page_id, "block_id": block.id, "block_type": block.block_type}
    )
    return block


@router.put("/{block_id}", response_model=BlockSchema)
async def update_block(
        page_id: str,
        block_id: str,
        block_data: Optional[BlockWrite] = Body(None),
        service: BlockService = Depends(get_block_service)
):
    page_id, block_id = parse_block_ids(page_id, block_id)
    api_logger.info(f"Updating block {block_id}", extra={"page_id": page_id, "block_id": block_id})
    return service.update(page_id, block_id, block_data or BlockWrite())


@router.delete("/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_block(page_id: str, block_id: str, service: BlockService = Depends(get_block_service)):
    page_id, block_id = parse_block_ids(page_id, block_id)
    api_logger.info(f"Deleting block {block_id}", extra={"page_id": page_id, "block_id": block_id})

    service.delete(page_id, block_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
