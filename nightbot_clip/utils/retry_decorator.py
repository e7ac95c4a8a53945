import time
import logging
from functools import wraps
from typing import Callable, Any, Type, Tuple, Optional

logger = logging.getLogger(__name__)


class PollExhausted(Exception):
    """Raised when every poll attempt failed with an exception"""
    pass


def poll_within_budget(
    attempts: int = 1,
    total_delay: float = 5.0,
    sleep: Callable[[float], None] = time.sleep,
    poll_exceptions: Tuple[Type[Exception], ...] = (Exception,),
    no_retry_on_status_codes: Optional[Tuple[int, ...]] = (400, 401, 403)
):
    """
    Decorator that waits before each call and repeats it until it returns
    something other than None.

    The wait budget is split evenly across attempts, so the total time spent
    sleeping never exceeds ``total_delay`` whatever ``attempts`` is.

    Args:
        attempts: Maximum number of calls
        total_delay: Seconds of waiting shared by all attempts
        sleep: Sleep function, injectable for tests
        poll_exceptions: Exceptions that count as a failed attempt
        no_retry_on_status_codes: Status codes (read from the exception's
            ``status_code``) that stop polling immediately

    Returns None when every attempt returned None. Raises PollExhausted when
    the last failure was an exception.
    """
    attempts = max(1, attempts)

    def decorator(func: Callable) -> Callable:
        name = getattr(func, '__name__', 'poll')

        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            delay = _calculate_delay(attempts, total_delay)
            last_exception = None

            for attempt in range(attempts):
                if delay > 0:
                    sleep(delay)

                try:
                    result = func(*args, **kwargs)
                except poll_exceptions as e:
                    last_exception = e
                    status_code = getattr(e, 'status_code', None)
                    if no_retry_on_status_codes and status_code in no_retry_on_status_codes:
                        logger.warning(
                            f"HTTP {status_code} from {name}, not polling again"
                        )
                        break
                    logger.warning(
                        f"Exception in {name} (attempt {attempt + 1}/{attempts}): "
                        f"{type(e).__name__}: {str(e)}"
                    )
                    continue

                if result is not None:
                    if attempt > 0:
                        logger.info(f"{name} returned data after {attempt + 1} attempts")
                    return result

                last_exception = None
                logger.info(f"{name} returned no data (attempt {attempt + 1}/{attempts})")

            if last_exception is not None:
                raise PollExhausted(
                    f"{name} failed after {attempt + 1} attempts. "
                    f"Last exception: {str(last_exception)}"
                ) from last_exception
            return None

        return wrapper
    return decorator


def _calculate_delay(attempts: int, total_delay: float) -> float:
    """Even share of the wait budget for one attempt"""
    if total_delay <= 0:
        return 0.0
    return total_delay / attempts
