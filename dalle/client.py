"""Synchronous client for the image generation API"""
import json
import time
from typing import BinaryIO, Dict, List, Optional, Tuple, Union

import requests

from config import DALLE_BASE_URL, DALLE_TIMEOUT, DALLE_USER_AGENT
from dalle.exceptions import DecodeError, PreconditionError, raise_for_status
from dalle.models import (
    ImageFile,
    ImageResponse,
    ImageResult,
    ImageSize,
    ResponseFormat,
    build_request,
    parse_envelope,
    read_image,
)
from utils.logging_config import get_logger, redact

logger = get_logger(__name__)

GENERATIONS_PATH = "/generations"
EDITS_PATH = "/edits"
VARIATIONS_PATH = "/variations"


def build_headers(api_key: str, user_agent: str, content_type: Optional[str] = None) -> Dict[str, str]:
    """Headers sent with every request. Multipart requests leave Content-Type to the encoder."""
    headers = {
        "Authorization": f"Bearer {api_key}",
        "User-Agent": user_agent,
    }
    if content_type:
        headers["Content-Type"] = content_type
    return headers


def decode_response(status_code: int, text: str) -> ImageResponse:
    """Classify the status and decode the envelope of a finished request"""
    raise_for_status(status_code, text)
    try:
        payload = json.loads(text)
    except ValueError as e:
        logger.error(f"Image API returned a body that is not JSON: {e}")
        raise DecodeError(f"invalid JSON in response: {e}", status_code) from e
    try:
        return parse_envelope(payload)
    except DecodeError as e:
        logger.error(f"Image API returned an unexpected envelope: {e}")
        raise


def multipart_files(*parts: ImageFile) -> Dict[str, Tuple[str, bytes, str]]:
    return {part.field: part.as_part() for part in parts}


class ImageClient:
    """
    Client for the image generation, edit and variation endpoints.

    Configuration is fixed at construction. The instance can be shared across
    threads; each call makes exactly one POST and never retries.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DALLE_BASE_URL,
        user_agent: str = DALLE_USER_AGENT,
        timeout: float = DALLE_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def timeout(self) -> float:
        return self._timeout

    def __repr__(self) -> str:
        return redact(
            f"ImageClient(base_url={self._base_url!r}, api_key={self._api_key!r}, "
            f"user_agent={self._user_agent!r}, timeout={self._timeout!r})",
            self._api_key,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the underlying session if this client created it"""
        if self._owns_session:
            self._session.close()

    def _post(self, path: str, **kwargs) -> List[ImageResult]:
        url = self._base_url + path
        logger.debug(f"📤 POST {url}")
        start = time.time()
        try:
            response = self._session.post(url, timeout=self._timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to {path} failed: {redact(str(e), self._api_key)}")
            raise

        logger.debug(f"📥 {path} answered {response.status_code} in {time.time() - start:.2f}s")
        if response.status_code != 200:
            logger.warning(f"Image API returned HTTP {response.status_code} for {path}")

        return decode_response(response.status_code, response.text).data

    def generate(
        self,
        prompt: str,
        size: Optional[Union[int, ImageSize]] = None,
        n: Optional[int] = None,
        user: Optional[str] = None,
        response_format: Optional[Union[str, ResponseFormat]] = None,
    ) -> List[ImageResult]:
        """
        Generate images from a text prompt.

        Args:
            prompt: Description of the image to generate
            size: Side length in pixels (256, 512 or 1024)
            n: Number of images to generate
            user: End-user identifier forwarded for abuse monitoring
            response_format: "url" or "b64_json"

        Returns:
            List of ImageResult in the order the API returned them
        """
        request = build_request(
            prompt=prompt, size=size, n=n, user=user, response_format=response_format
        )
        return self._post(
            GENERATIONS_PATH,
            json=request.to_json(),
            headers=build_headers(self._api_key, self._user_agent, "application/json"),
        )

    def edit(
        self,
        prompt: str,
        image: Optional[BinaryIO],
        mask: Optional[BinaryIO],
        size: Optional[Union[int, ImageSize]] = None,
        n: Optional[int] = None,
        user: Optional[str] = None,
        response_format: Optional[Union[str, ResponseFormat]] = None,
    ) -> List[ImageResult]:
        """
        Edit an image; transparent areas of the mask mark the region to regenerate.

        Both streams are read to the end and left open.
        """
        if image is None:
            raise PreconditionError("image is required")
        if mask is None:
            raise PreconditionError("mask is required")

        request = build_request(
            prompt=prompt, size=size, n=n, user=user, response_format=response_format
        )
        image_file = read_image(image, "image")
        mask_file = read_image(mask, "mask")
        return self._post(
            EDITS_PATH,
            data=request.to_form(),
            files=multipart_files(image_file, mask_file),
            headers=build_headers(self._api_key, self._user_agent),
        )

    def variation(
        self,
        image: Optional[BinaryIO],
        size: Optional[Union[int, ImageSize]] = None,
        n: Optional[int] = None,
        user: Optional[str] = None,
        response_format: Optional[Union[str, ResponseFormat]] = None,
    ) -> List[ImageResult]:
        """Create variations of an image. The stream is read to the end and left open."""
        if image is None:
            raise PreconditionError("image is required")

        request = build_request(size=size, n=n, user=user, response_format=response_format)
        image_file = read_image(image, "image")
        return self._post(
            VARIATIONS_PATH,
            data=request.to_form(),
            files=multipart_files(image_file),
            headers=build_headers(self._api_key, self._user_agent),
        )


def new_client(api_key: str) -> ImageClient:
    """Create a client with the configured base URL, user agent and timeout"""
    return ImageClient(api_key)
