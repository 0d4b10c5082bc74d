"""Translate service errors into HTTP responses at the router boundary."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.services.errors import AuthorizationError, NotFoundError, ValidationFailed

logger = logging.getLogger(__name__)


@contextmanager
def service_errors(action: str, **context: object) -> Iterator[None]:
    """
    Map expected service failures to 422/403/404. Database failures are logged
    once with context and reported as a generic 500; nothing internal leaks.
    """
    try:
        yield
    except ValidationFailed as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": e.message, "errors": e.errors},
        ) from e
    except AuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.exception(
            "Database error while trying to %s",
            action,
            extra={"action": action, **context},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}",
        ) from e
