from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from shortlinks.dependencies import get_link_service
from shortlinks.exceptions import LimitExceededError, LinkExpiredError, LinkNotFoundError
from shortlinks.services.link_service import LinkService

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
def redirect_to_original_url(
    short_code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the original URL.

    Every successful redirect counts one click against the link's quota.
    Expired and exhausted links answer 410 Gone; the owner is notified.
    """
    try:
        original_url = link_service.resolve(short_code)
    except LinkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (LinkExpiredError, LimitExceededError) as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
