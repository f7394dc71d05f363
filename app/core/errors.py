"""
Application errors - one class per failure kind, each carrying its HTTP status.
Design: Services and verifiers raise these; main.py turns them into JSON responses,
GraphQL reports them in the errors array.
"""


class AppError(Exception):
    """Base class. `message` is safe to show to the caller."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class BadRequestError(AppError):
    status_code = 400


class UnauthenticatedError(AppError):
    """No session or token, or one that does not check out."""

    status_code = 401


class TokenExpiredError(UnauthenticatedError):
    """Well-formed token whose exp claim has passed."""


class ForbiddenError(AppError):
    """Caller is known but does not own the row (or the row does not exist)."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ReferenceNotFoundError(NotFoundError):
    """A parent row named in the request body does not exist for this caller."""


class ConflictError(AppError):
    status_code = 409


class ProviderError(AppError):
    """The OAuth identity provider failed; not the caller's fault."""

    status_code = 502
