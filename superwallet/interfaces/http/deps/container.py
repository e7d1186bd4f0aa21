"""Access to the application container stored on the app."""

from fastapi import Request

from superwallet.core.container import ApplicationContainer


def get_app_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


__all__ = ["get_app_container"]
