from time import perf_counter
from typing import Callable, Optional

class RefinementTimeout(Exception):
    """
    Raised when a refinement exceeds its time limit. The limit is only
    checked between two steps, so no partial state escapes.
    """
    @classmethod
    def make_checker(cls, time_limit: Optional[float] = None) -> Callable[[], None]:
        """
        Return a function that raises RefinementTimeout once `time_limit`
        seconds have passed since this call. A None limit never expires.
        """
        if time_limit is None:
            return lambda: None
        if time_limit < 0:
            raise ValueError(f"Time limit should be nonnegative, but got {time_limit}.")
        end_time = perf_counter() + time_limit
        def checker():
            if perf_counter() > end_time:
                raise cls(f"Time limit {time_limit} seconds exceeded.")
        return checker
