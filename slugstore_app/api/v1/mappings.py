from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from slugstore_app.dependencies import get_slug_service, require_api_token
from slugstore_app.errors import InvalidCursorError, ShortenFailedError
from slugstore_app.schemas.keys import KeyListPage
from slugstore_app.schemas.mapping import (
    BareShortenResponse,
    ErrorResponse,
    ShortenRequest,
    ShortenResponse,
)
from slugstore_app.services.slug_service import SlugService

router = APIRouter(tags=["mappings"])


@router.post(
    "/",
    response_model=ShortenResponse,
    dependencies=[Depends(require_api_token)],
    responses={401: {"description": "Invalid API token"}}
)
async def create_short_url(
    body: ShortenRequest,
    slug_service: SlugService = Depends(get_slug_service)
):
    """Shorten body.url under a random slug (requires Authorization header)"""
    mapping = await slug_service.create(body.url)
    return ShortenResponse(url=slug_service.short_url(mapping.slug))


@router.get(
    "/shorten/{url:path}",
    response_model=BareShortenResponse,
    responses={500: {"model": ErrorResponse}}
)
async def shorten_bare_host(
    url: str,
    slug_service: SlugService = Depends(get_slug_service)
):
    """
    Shorten a URL-encoded host given without scheme.
    
    The server has already percent-decoded the path once; url is used
    as-is so escapes inside the host path (e.g. %26) survive.
    
    The host is probed over HTTPS first and stored with http:// if that
    fails. Any error on this path gives a generic 500.
    """
    try:
        mapping = await slug_service.create_from_bare_host(url)
    except ShortenFailedError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": e.message}
        )
    return BareShortenResponse(short_url=slug_service.bare_short_url(mapping.slug))


@router.get(
    "/keys/list",
    response_model=KeyListPage,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}}
)
async def list_keys(
    cursor: Optional[str] = Query(None, description="Opaque cursor from the previous page"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    slug_service: SlugService = Depends(get_slug_service)
):
    """List stored slugs one page at a time"""
    try:
        return await slug_service.list(cursor=cursor, limit=limit)
    except InvalidCursorError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": e.message}
        )
