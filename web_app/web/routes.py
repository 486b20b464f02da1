"""Browser-facing redirect route."""

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from shortlink.errors import NotFound

router = APIRouter()


@router.get("/{short_id}", include_in_schema=False)
async def redirect_to_url(request: Request, short_id: str):
    """Record a visit and redirect to the original URL."""
    service = request.app.state.service

    try:
        redirect_url = await service.resolve(short_id)
    except NotFound:
        # Browsers navigate here directly, so answer in plain text.
        return PlainTextResponse("Short URL not found", status_code=status.HTTP_404_NOT_FOUND)

    # 302 (temporary) so every visit comes back through the service and is recorded
    return RedirectResponse(url=redirect_url, status_code=status.HTTP_302_FOUND)
