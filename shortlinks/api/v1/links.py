from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from shortlinks.dependencies import get_current_user, get_link_service
from shortlinks.exceptions import (
    AccessDeniedError,
    GenerationExhaustedError,
    InvalidClickLimitError,
    InvalidUrlError,
    LinkNotFoundError,
)
from shortlinks.models.link import LinkRecord
from shortlinks.models.user import User
from shortlinks.schemas.link import LinkCreate, LinkResponse, LinkUpdate
from shortlinks.services.link_service import LinkService

router = APIRouter(prefix="/links", tags=["links"])


def to_response(link: LinkRecord, link_service: LinkService) -> LinkResponse:
    return LinkResponse.from_record(
        link,
        short_url=link_service.short_url(link.short_code),
        now=link_service.registry.clock(),
    )


@router.post("/", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
def create_link(
    link_data: LinkCreate,
    user: User = Depends(get_current_user),
    link_service: LinkService = Depends(get_link_service)
):
    """Create a short link (returns the existing one for a repeated URL)"""
    try:
        link = link_service.create_link(link_data.url, user.id, link_data.click_limit)
    except InvalidUrlError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except GenerationExhaustedError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return to_response(link, link_service)


@router.get("/", response_model=List[LinkResponse])
def list_links(
    user: User = Depends(get_current_user),
    link_service: LinkService = Depends(get_link_service)
):
    """List the caller's links in creation order"""
    return [to_response(link, link_service) for link in link_service.list_links(user.id)]


@router.get("/{short_code}", response_model=LinkResponse)
def get_link(
    short_code: str,
    user: User = Depends(get_current_user),
    link_service: LinkService = Depends(get_link_service)
):
    """Get information about one of the caller's links"""
    try:
        link = link_service.get_link(short_code, user.id)
    except LinkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return to_response(link, link_service)


@router.patch("/{short_code}", response_model=LinkResponse)
def update_link(
    short_code: str,
    link_data: LinkUpdate,
    user: User = Depends(get_current_user),
    link_service: LinkService = Depends(get_link_service)
):
    """Change the click limit of one of the caller's links"""
    try:
        link = link_service.update_click_limit(short_code, user.id, link_data.click_limit)
    except InvalidClickLimitError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LinkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return to_response(link, link_service)


@router.delete("/{short_code}", status_code=status.HTTP_204_NO_CONTENT)
def delete_link(
    short_code: str,
    user: User = Depends(get_current_user),
    link_service: LinkService = Depends(get_link_service)
):
    """Delete one of the caller's links and free its code"""
    if not link_service.delete_link(short_code, user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short link not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
