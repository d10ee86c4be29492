# backend/flipbook/client.py
"""
Async client for the Flipbook REST API.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .config import settings
from .schemas.block import Block
from .schemas.page import Page
from .schemas.upload import UploadResult
from .utils.logging import service_logger

ModelT = TypeVar("ModelT", bound=BaseModel)

# Marks an update field the caller did not pass
UNSET: Any = object()


class FlipbookClientError(Exception):
    """Request rejected by the API, or not answered with JSON."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PageBlocksResult:
    """Blocks of one page, or the error that prevented loading them."""

    def __init__(self, page_id: int, blocks: Optional[List[Block]] = None, error: Optional[str] = None):
        self.page_id = page_id
        self.blocks = blocks or []
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None


class FlipbookClient:
    """Typed wrappers around each API endpoint."""

    def __init__(
            self,
            base_url: Optional[str] = None,
            timeout: float = 30.0,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "FlipbookClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    def _url(self, *parts: Union[str, int]) -> str:
        path = "/".join(quote(str(part), safe="") for part in parts)
        return f"{self.base_url}/{path}"

    async def _request(self, method: str, *parts: Union[str, int], **kwargs) -> Any:
        response = await self.client.request(method, self._url(*parts), **kwargs)
        return self._parse_response(response)

    @staticmethod
    def _parse_response(response: httpx.Response) -> Any:
        if response.is_success:
            if response.status_code == 204:
                return None
            try:
                return response.json()
            except ValueError:
                raise FlipbookClientError("Request failed", status_code=response.status_code)

        message = "Request failed"
        try:
            data = response.json()
            if isinstance(data, dict) and data.get("error"):
                message = data["error"]
        except ValueError:
            pass
        raise FlipbookClientError(message, status_code=response.status_code)

    @staticmethod
    def _validate(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise FlipbookClientError(f"Unexpected {model.__name__} response: {e.error_count()} invalid fields")

    def _validate_list(self, model: Type[ModelT], data: Any) -> List[ModelT]:
        if not isinstance(data, list):
            raise FlipbookClientError(f"Unexpected {model.__name__} list response")
        return [self._validate(model, item) for item in data]

    async def health(self) -> bool:
        try:
            data = await self._request("GET", "health")
        except (FlipbookClientError, httpx.HTTPError):
            return False
        return isinstance(data, dict) and bool(data.get("ok"))

    async def get_pages(self) -> List[Page]:
        data = await self._request("GET", "pages")
        return self._validate_list(Page, data)

    async def create_page(self, title: str) -> Page:
        data = await self._request("POST", "pages", json={"title": title})
        return self._validate(Page, data)

    async def update_page(self, page_id: int, title: Any = UNSET, sort_order: Any = UNSET) -> Page:
        """Partial update; only the fields passed are sent.

        Passing ``title=None`` sends an explicit null, which clears the title.
        """
        payload: Dict[str, Any] = {}
        if title is not UNSET:
            payload["title"] = title
        if sort_order is not UNSET:
            payload["sortOrder"] = sort_order
        data = await self._request("PUT", "pages", page_id, json=payload)
        return self._validate(Page, data)

    async def delete_page(self, page_id: int) -> None:
        await self._request("DELETE", "pages", page_id)

    async def get_blocks(self, page_id: int) -> List[Block]:
        data = await self._request("GET", "pages", page_id, "blocks")
        return self._validate_list(Block, data)

    async def create_block(self, page_id: int, block_type: str, content: str) -> Block:
        data = await self._request(
            "POST", "pages", page_id, "blocks",
            json={"blockType": block_type, "content": content}
        )
        return self._validate(Block, data)

    async def update_block(
            self,
            page_id: int,
            block_id: int,
            block_type: str,
            content: str,
            sort_order: Optional[int] = None
    ) -> Block:
        payload: Dict[str, Any] = {"blockType": block_type, "content": content}
        if sort_order is not None:
            payload["sortOrder"] = sort_order
        data = await self._request("PUT", "pages", page_id, "blocks", block_id, json=payload)
        return self._validate(Block, data)

    async def delete_block(self, page_id: int, block_id: int) -> None:
        await self._request("DELETE", "pages", page_id, "blocks", block_id)

    async def upload_image(self, file_name: str, data: bytes, content_type: str) -> UploadResult:
        result = await self._request(
            "POST", "uploads",
            files={"image": (file_name, data, content_type)}
        )
        return self._validate(UploadResult, result)

    async def load_page_blocks(self, page_ids: Iterable[int]) -> Dict[int, PageBlocksResult]:
        """Load blocks for several pages at once.

        Each page loads independently; a failure is recorded on that page's
        result instead of aborting the others.
        """
        page_ids = list(page_ids)

        async def load(page_id: int) -> PageBlocksResult:
            try:
                return PageBlocksResult(page_id, blocks=await self.get_blocks(page_id))
            except (FlipbookClientError, httpx.HTTPError) as e:
                service_logger.warning(
                    f"Failed to load blocks for page {page_id}",
                    extra={"page_id": page_id, "error": str(e)}
                )
                return PageBlocksResult(page_id, error=str(e) or "Request failed")

        results = await asyncio.gather(*(load(page_id) for page_id in page_ids))
        return {result.page_id: result for result in results}
