"""Async client for the image generation API"""
import time
from typing import BinaryIO, List, Optional, Union

import httpx

from config import DALLE_BASE_URL, DALLE_TIMEOUT, DALLE_USER_AGENT
from dalle.client import (
    EDITS_PATH,
    GENERATIONS_PATH,
    VARIATIONS_PATH,
    build_headers,
    decode_response,
    multipart_files,
)
from dalle.exceptions import PreconditionError
from dalle.models import ImageResult, ImageSize, ResponseFormat, build_request, read_image
from utils.logging_config import get_logger, redact

logger = get_logger(__name__)


class AsyncImageClient:
    """Coroutine version of ImageClient with the same request and error contract"""

    def __init__(
        self,
        api_key: str,
        base_url: str = DALLE_BASE_URL,
        user_agent: str = DALLE_USER_AGENT,
        timeout: float = DALLE_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def timeout(self) -> float:
        return self._timeout

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, path: str, **kwargs) -> List[ImageResult]:
        url = self._base_url + path
        logger.debug(f"📤 POST {url}")
        start = time.time()
        try:
            response = await self._client.post(url, timeout=self._timeout, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {path} failed: {redact(str(e), self._api_key)}")
            raise

        logger.debug(f"📥 {path} answered {response.status_code} in {time.time() - start:.2f}s")
        if response.status_code != 200:
            logger.warning(f"Image API returned HTTP {response.status_code} for {path}")

        return decode_response(response.status_code, response.text).data

    async def generate(
        self,
        prompt: str,
        size: Optional[Union[int, ImageSize]] = None,
        n: Optional[int] = None,
        user: Optional[str] = None,
        response_format: Optional[Union[str, ResponseFormat]] = None,
    ) -> List[ImageResult]:
        request = build_request(
            prompt=prompt, size=size, n=n, user=user, response_format=response_format
        )
        return await self._post(
            GENERATIONS_PATH,
            json=request.to_json(),
            headers=build_headers(self._api_key, self._user_agent, "application/json"),
        )

    async def edit(
        self,
        prompt: str,
        image: Optional[BinaryIO],
        mask: Optional[BinaryIO],
        size: Optional[Union[int, ImageSize]] = None,
        n: Optional[int] = None,
        user: Optional[str] = None,
        response_format: Optional[Union[str, ResponseFormat]] = None,
    ) -> List[ImageResult]:
        if image is None:
            raise PreconditionError("image is required")
        if mask is None:
            raise PreconditionError("mask is required")

        request = build_request(
            prompt=prompt, size=size, n=n, user=user, response_format=response_format
        )
        image_file = read_image(image, "image")
        mask_file = read_image(mask, "mask")
        return await self._post(
            EDITS_PATH,
            data=request.to_form(),
            files=multipart_files(image_file, mask_file),
            headers=build_headers(self._api_key, self._user_agent),
        )

    async def variation(
        self,
        image: Optional[BinaryIO],
        size: Optional[Union[int, ImageSize]] = None,
        n: Optional[int] = None,
        user: Optional[str] = None,
        response_format: Optional[Union[str, ResponseFormat]] = None,
    ) -> List[ImageResult]:
        if image is None:
            raise PreconditionError("image is required")

        request = build_request(size=size, n=n, user=user, response_format=response_format)
        image_file = read_image(image, "image")
        return await self._post(
            VARIATIONS_PATH,
            data=request.to_form(),
            files=multipart_files(image_file),
            headers=build_headers(self._api_key, self._user_agent),
        )
