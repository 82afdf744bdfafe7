"""
Parallel fan-out for independent backend reads.

Edit screens need a parent row and its translations at the same time; the
reads are issued together and joined before the form is built.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from ..api.client import BackendAPIError


@dataclass
class Outcome:
    """Result of one fanned-out call: either a value or a backend error"""
    value: Any = None
    error: Optional[BackendAPIError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fan_out(*calls: Callable[[], Any]) -> List[Outcome]:
    """
    Run calls concurrently and return their outcomes in call order.

    Backend errors are captured per call so one failed read does not hide
    the others; any other exception propagates.
    """
    if not calls:
        return []

    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        futures = [executor.submit(call) for call in calls]
        outcomes = []
        for future in futures:
            try:
                outcomes.append(Outcome(value=future.result()))
            except BackendAPIError as e:
                outcomes.append(Outcome(error=e))
    return outcomes
