# contactbook/utils/decorators.py
import inspect
from functools import wraps
from time import time
from contactbook.core.logging import get_logger

logger = get_logger(__name__)


def log_request(func):
    """
    Decorator to log incoming requests and their processing time.
    Works with both `def` and `async def` endpoints.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time()
        logger.info(f"Request started for endpoint: {func.__name__}")

        if inspect.iscoroutinefunction(func):
            response = await func(*args, **kwargs)
        else:
            response = func(*args, **kwargs)

        process_time = time() - start_time
        logger.info(
            f"Request to endpoint {func.__name__} finished in {process_time:.4f} seconds"
        )
        return response

    return wrapper
