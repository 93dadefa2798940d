"""Translate unexpected collaborator failures into InternalError."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from users_identity.domain.shared.exceptions import DomainException, InternalError

logger = logging.getLogger(__name__)


@contextmanager
def internal_errors(operation: str) -> Iterator[None]:
    """Wrap store, crypto and notifier errors raised inside the block.

    Domain exceptions pass through untouched; anything else is logged with
    its traceback and re-raised as InternalError so callers never see
    driver or library internals.
    """
    try:
        yield
    except DomainException:
        raise
    except Exception as e:
        logger.exception("%s failed: %s", operation, e)
        raise InternalError(
            details={"operation": operation, "error": type(e).__name__},
        ) from e
