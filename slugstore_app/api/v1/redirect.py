from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse

from slugstore_app.dependencies import get_slug_service
from slugstore_app.errors import MappingNotFoundError
from slugstore_app.schemas.mapping import ErrorResponse
from slugstore_app.services.slug_service import SlugService

router = APIRouter(tags=["redirect"])


@router.get(
    "/{slug}",
    responses={404: {"model": ErrorResponse}}
)
async def redirect_to_target(
    slug: str,
    slug_service: SlugService = Depends(get_slug_service)
):
    """Redirect to the URL stored under slug"""
    try:
        target = await slug_service.resolve(slug)
    except MappingNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": e.message}
        )
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
