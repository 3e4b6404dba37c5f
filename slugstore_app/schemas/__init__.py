from .keys import KeyInfo, KeyListPage
from .mapping import (
    SlugMapping,
    ShortenRequest,
    ShortenResponse,
    BareShortenResponse,
    ErrorResponse,
    validate_target_url,
)

__all__ = [
    "KeyInfo",
    "KeyListPage",
    "SlugMapping",
    "ShortenRequest",
    "ShortenResponse",
    "BareShortenResponse",
    "ErrorResponse",
    "validate_target_url",
]
