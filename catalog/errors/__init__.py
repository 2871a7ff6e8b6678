"""Error handling module for the Product Catalog store."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    NotFoundError,
    InternalServerError,
    ServiceUnavailableError
)

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "NotFoundError",
    "InternalServerError",
    "ServiceUnavailableError"
]
