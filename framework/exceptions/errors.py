"""
Error taxonomy shared by the repository layer and the API.

InvalidArgumentError is raised synchronously, before any store I/O.
PersistenceError surfaces from the store (at commit time, or when an
update/delete targets an identity the store does not hold) and is never
retried here.
"""

from typing import Any


class BusinessException(Exception):
    """Base class for business exceptions."""
    def __init__(self, message: str, status_code: int = 200, code: int = 400, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.detail = detail


class InvalidArgumentError(BusinessException):
    """Bad paging parameters, null entity, entity of the wrong type."""

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message, status_code=400, code=400, detail=detail)


class PersistenceError(BusinessException):
    """The store rejected an operation (constraint violation, connectivity loss)."""

    def __init__(self, message: str, status_code: int = 500, code: int = 500, detail: Any = None):
        super().__init__(message, status_code=status_code, code=code, detail=detail)


class NotFoundError(PersistenceError):
    """No stored row matches the requested identity."""

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message, status_code=404, code=404, detail=detail)


class UnitOfWorkDisposedError(RuntimeError):
    """A disposed UnitOfWork was used again."""
