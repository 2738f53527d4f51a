"""
FastAPI dependencies for dependency injection.

All components come from the AppContainer stored on `app.state` at
startup, so routes never reach for module-level singletons.

Pattern: Dependency Injection
- Loose coupling between routes and the core
- Easy to test (build a container with a fake clock)
"""

from fastapi import Depends, Header, Request

from shortlinks.container import AppContainer
from shortlinks.models.user import User
from shortlinks.services.link_service import LinkService

SESSION_HEADER = "X-Session-Token"


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def get_link_service(container: AppContainer = Depends(get_container)) -> LinkService:
    return container.link_service


def get_current_user(
    x_session_token: str = Header(..., alias=SESSION_HEADER, min_length=1),
    container: AppContainer = Depends(get_container),
) -> User:
    """
    Resolve the caller's session token to a user, creating one on first use.

    The token is opaque; there is no authentication beyond it.
    """
    return container.user_registry.get_or_create(x_session_token)
