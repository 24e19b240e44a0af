from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable


def log_calls(logger_name: str | None = None, level: int = logging.DEBUG) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator logging each call and its result; failures are logged and re-raised."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.log(level, "Calling %s args=%s kwargs=%s", func.__name__, args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error("%s failed: %s", func.__name__, e)
                raise
            logger.log(level, "%s returned %r", func.__name__, result)
            return result

        return _wrapper

    return _decorator


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
