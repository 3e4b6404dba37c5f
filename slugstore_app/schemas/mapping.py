from typing import Annotated

from pydantic import (
    AnyUrl,
    BaseModel,
    Field,
    TypeAdapter,
    UrlConstraints,
    ValidationError,
    field_validator,
)

# HttpUrl caps length at 2083; targets of any length are accepted
_http_url = TypeAdapter(
    Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)]
)


def validate_target_url(value: str) -> str:
    """
    Check that value is an absolute http(s) URL.
    
    Returns the string unchanged: pydantic's normalised form (trailing
    slash, punycode) must not leak into the stored target.
    
    Raises:
        ValueError: if the URL is malformed
    """
    try:
        _http_url.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"Invalid URL: {value!r}") from e
    return value


class SlugMapping(BaseModel):
    slug: str = Field(..., description="Short opaque key")
    target: str = Field(..., description="Absolute URL the slug redirects to")


class ShortenRequest(BaseModel):
    url: str = Field(..., description="The original URL to be shortened")

    @field_validator("url")
    @classmethod
    def url_must_be_absolute(cls, value: str) -> str:
        return validate_target_url(value.strip())


class ShortenResponse(BaseModel):
    url: str


class BareShortenResponse(BaseModel):
    short_url: str


class ErrorResponse(BaseModel):
    error: str
