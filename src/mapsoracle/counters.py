from __future__ import annotations

from collections import Counter
from typing import Dict, Protocol


class CallCounter(Protocol):
    def increment(self, name: str) -> None:
        ...


class ApiCallCounter:
    """
    Per-endpoint tally of metered API calls.
    One increment per request issued, successful or not.
    """

    def __init__(self) -> None:
        self._counts: Counter = Counter()

    def increment(self, name: str) -> None:
        self._counts[name] += 1

    def total(self) -> int:
        return sum(self._counts.values())

    def as_dict(self) -> Dict[str, int]:
        return dict(self._counts)

    def __getitem__(self, name: str) -> int:
        return self._counts[name]
