"""Centralized error handler for featcheck commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from featcheck.exceptions import FeatCheckError
from featcheck.utils.logging import logger

from .exit_codes import ExitCodes


class RunFailed(click.ClickException):
    """ClickException that exits with ExitCodes.RUN_FAILED instead of 1.

    Exit code 1 is reserved for "hidden features found".
    """

    exit_code = ExitCodes.RUN_FAILED


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that turns hard failures into a descriptive CLI error."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except click.exceptions.Exit:
            raise
        except click.ClickException:
            raise
        except FeatCheckError as e:
            logger.debug("Command '{cmd}' failed: {details}", cmd=func.__name__, details=e.details)
            raise RunFailed(f"{type(e).__name__}: {e.message}") from e
        except Exception as e:
            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=str(e),
            )
            raise RunFailed(f"{type(e).__name__}: {e}") from e

    return wrapper
