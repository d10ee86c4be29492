# backend/flipbook/api/pages.py
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.page import Page as PageSchema, PageCreate, PageUpdate
from ..services.pages import PageService
from ..utils.logging import api_logger
from ..utils.validation import parse_positive_id

router = APIRouter(prefix="/api/pages", tags=["pages"])


def get_page_service(db: Session = Depends(get_db)) -> PageService:
    return PageService(db)


@router.get("", response_model=List[PageSchema])
async def list_pages(service: PageService = Depends(get_page_service)):
    pages = service.list()
    api_logger.debug(f"Found {len(pages)} pages")
    return pages


@router.post("", response_model=PageSchema, status_code=status.HTTP_201_CREATED)
async def create_page(
        page_data: Optional[PageCreate] = Body(None),
        service: PageService = Depends(get_page_service)
):
    page = service.create(page_data or PageCreate())
    api_logger.info("Page created", extra={"page_id": page.id, "sort_order": page.sort_order})
    return page


@router.put("/{page_id}", response_model=PageSchema)
async def update_page(
        page_id: str,
        page_update: Optional[PageUpdate] = Body(None),
        service: PageService = Depends(get_page_service)
):
    page_id = parse_positive_id(page_id, "invalid page id")
    page_update = page_update or PageUpdate()

    api_logger.info(
        f"Updating page {page_id}",
        extra={
            "page_id": page_id,
            "update_fields": sorted(page_update.model_fields_set)
        }
    )
    return service.update(page_id, page_update)


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(page_id: str, service: PageService = Depends(get_page_service)):
    page_id = parse_positive_id(page_id, "invalid page id")
    api_logger.info(f"Deleting page {page_id}", extra={"page_id": page_id})

    service.delete(page_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
