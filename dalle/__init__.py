"""Client for the image generation, edit and variation API"""
from dalle.async_client import AsyncImageClient
from dalle.client import ImageClient, new_client
from dalle.exceptions import (
    STATUS_ERRORS,
    BadGatewayError,
    BadRequestError,
    DalleError,
    DecodeError,
    ForbiddenError,
    GatewayTimeoutError,
    InternalServerError,
    NotFoundError,
    PreconditionError,
    RateLimitError,
    SerializationError,
    ServiceUnavailableError,
    StatusError,
    UnauthorizedError,
    UnknownStatusError,
)
from dalle.models import ImageResponse, ImageResult, ImageSize, ResponseFormat

__all__ = [
    'AsyncImageClient',
    'ImageClient',
    'new_client',
    'ImageResponse',
    'ImageResult',
    'ImageSize',
    'ResponseFormat',
    'STATUS_ERRORS',
    'DalleError',
    'PreconditionError',
    'SerializationError',
    'DecodeError',
    'StatusError',
    'BadRequestError',
    'UnauthorizedError',
    'ForbiddenError',
    'NotFoundError',
    'RateLimitError',
    'InternalServerError',
    'BadGatewayError',
    'ServiceUnavailableError',
    'GatewayTimeoutError',
    'UnknownStatusError',
]
