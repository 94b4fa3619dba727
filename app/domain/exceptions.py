"""Domain level errors raised by the application use cases."""


class DomainError(Exception):
    """Base class for errors the interface layer translates for clients."""


class StoreUnavailable(DomainError):
    """The persistent store could not serve a read or a transactional write."""


class NotFound(DomainError):
    """The requested record does not exist for the calling user."""


class Unauthorized(DomainError):
    """The caller lacks the capability required for the operation."""


__all__ = ["DomainError", "StoreUnavailable", "NotFound", "Unauthorized"]
