"""Exception types and graceful-degradation helpers.

InputError and IngredientValidationError are programming/boundary errors and
propagate to the caller. EmbeddingServiceError and RecipeSourceError describe
optional collaborators failing; callers catch them and degrade.
"""

from recipe_matcher.utils.logger import logger


class InputError(ValueError):
    """Vectors of different length were compared."""


class IngredientValidationError(ValueError):
    """Caller supplied a malformed ingredient collection."""


class EmbeddingServiceError(RuntimeError):
    """Remote embedding call failed or returned an unusable vector."""


class RecipeSourceError(RuntimeError):
    """A recipe source could not be queried."""


def _log_error(operation_name: str, exception: Exception, log_level: str = "warning") -> None:
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg)
    elif log_level == "error":
        logger.error(msg)
    else:
        logger.warning(msg)


async def safe_execute_async(
    coro,
    operation_name: str,
    log_level: str = "warning",
    default_return=None,
    reraise: bool = False,
):
    """Await ``coro``, logging and returning ``default_return`` on failure.

    Args:
        coro: Awaitable to execute.
        operation_name: Description for logging (e.g., "Spoonacular search").
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        default_return: Value returned when the awaitable raises.
        reraise: Re-raise after logging instead of returning the default.

    Returns:
        Result of the awaitable, or default_return on exception.
    """
    try:
        return await coro
    except Exception as e:
        _log_error(operation_name, e, log_level)
        if reraise:
            raise
        return default_return


def safe_execute_sync(
    func,
    operation_name: str,
    log_level: str = "warning",
    default_return=None,
    reraise: bool = False,
):
    """Synchronous counterpart of safe_execute_async (``func`` takes no args)."""
    try:
        return func()
    except Exception as e:
        _log_error(operation_name, e, log_level)
        if reraise:
            raise
        return default_return
