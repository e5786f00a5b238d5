# marketplace/core/errors.py
"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; ``main.create_app``
registers a handler that renders them as ``{"kind": ..., "detail": ...}``.
"""


class MarketplaceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidInput(MarketplaceError):
    status_code = 400


class DuplicateIdentity(MarketplaceError):
    status_code = 400


class InvalidTransition(MarketplaceError):
    status_code = 400


class InvalidCredentials(MarketplaceError):
    status_code = 401


class Unauthenticated(MarketplaceError):
    status_code = 401


class Forbidden(MarketplaceError):
    status_code = 403


class NotFound(MarketplaceError):
    status_code = 404
