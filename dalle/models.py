"""Pydantic models for image requests and responses"""
import base64
import binascii
import mimetypes
import os
from enum import Enum, IntEnum
from typing import Any, BinaryIO, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError

from dalle.exceptions import DecodeError, PreconditionError, SerializationError


class ImageSize(IntEnum):
    """Supported square output sizes, in pixels per side"""
    SMALL = 256
    MEDIUM = 512
    LARGE = 1024

    @property
    def wire(self) -> str:
        return f"{self.value}x{self.value}"


class ResponseFormat(str, Enum):
    URL = "url"
    B64_JSON = "b64_json"


class ImageRequest(BaseModel):
    """Optional parameters shared by generation, edit and variation requests.

    Unset fields are left out of the request body entirely.
    """
    model_config = ConfigDict(frozen=True)

    prompt: Optional[str] = None
    n: Optional[PositiveInt] = None
    size: Optional[ImageSize] = None
    response_format: Optional[ResponseFormat] = None
    user: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        """Body for a JSON request, ``n`` stays an integer"""
        payload: Dict[str, Any] = {}
        if self.prompt is not None:
            payload["prompt"] = self.prompt
        if self.n is not None:
            payload["n"] = self.n
        if self.size is not None:
            payload["size"] = self.size.wire
        if self.response_format is not None:
            payload["response_format"] = self.response_format.value
        if self.user is not None:
            payload["user"] = self.user
        return payload

    def to_form(self) -> Dict[str, str]:
        """Text fields for a multipart request"""
        return {key: str(value) for key, value in self.to_json().items()}


def build_request(
    prompt: Optional[str] = None,
    size: Optional[Union[int, ImageSize]] = None,
    n: Optional[int] = None,
    user: Optional[str] = None,
    response_format: Optional[Union[str, ResponseFormat]] = None,
) -> ImageRequest:
    """Validate call arguments, reporting problems as PreconditionError"""
    try:
        return ImageRequest(
            prompt=prompt,
            n=n,
            size=size,
            response_format=response_format,
            user=user,
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise PreconditionError(f"invalid request parameters ({problems})") from e


class ImageResult(BaseModel):
    """One generated image, as a URL or a base64 payload"""
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None

    def decode_image(self) -> Optional[bytes]:
        if self.b64_json is None:
            return None
        try:
            return base64.b64decode(self.b64_json, validate=True)
        except binascii.Error as e:
            raise DecodeError(f"invalid base64 image payload: {e}") from e


class ImageResponse(BaseModel):
    """Response envelope returned by every image endpoint"""
    created: int
    data: List[ImageResult]


def parse_envelope(payload: Any) -> ImageResponse:
    try:
        return ImageResponse.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"unexpected response shape: {e.error_count()} validation error(s)") from e


class ImageFile(BaseModel):
    """Binary payload for a multipart file field"""
    model_config = ConfigDict(frozen=True)

    field: str
    filename: str
    content: bytes

    @property
    def content_type(self) -> str:
        return mimetypes.guess_type(self.filename)[0] or "image/png"

    def as_part(self) -> Tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)


def read_image(stream: Optional[Union[BinaryIO, bytes, bytearray]], field: str) -> ImageFile:
    """
    Read an image or mask payload to the end.

    The stream is left open; closing it is up to the caller.

    Args:
        stream: Binary file-like object (or raw bytes)
        field: Multipart field name, used for errors and as a fallback filename

    Returns:
        ImageFile ready to be attached to a multipart body
    """
    if stream is None:
        raise PreconditionError(f"{field} is required")

    if isinstance(stream, (bytes, bytearray)):
        return ImageFile(field=field, filename=f"{field}.png", content=bytes(stream))

    name = getattr(stream, "name", None)
    filename = os.path.basename(name) if isinstance(name, str) and name else f"{field}.png"

    try:
        content = stream.read()
    except (OSError, ValueError) as e:
        raise SerializationError(f"failed to read {field}: {e}") from e

    if isinstance(content, str):
        raise SerializationError(f"{field} must be opened in binary mode")

    return ImageFile(field=field, filename=filename, content=content)
