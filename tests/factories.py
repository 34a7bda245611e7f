"""
Test data factories for Daily Quote Quiz tests
"""

import itertools
from typing import Dict, Iterable, Iterator, Optional

from faker import Faker

fake = Faker()


class SequentialIdFactory:
    """Deterministic id generator: s0001, s0002, ..."""

    def __init__(self, prefix: str = "s"):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter):04d}"


class FixedIdFactory:
    """Returns the given ids in order"""

    def __init__(self, ids: Iterable[str]):
        self._ids: Iterator[str] = iter(ids)

    def __call__(self) -> str:
        return next(self._ids)


class SubmissionFactory:
    """Factory for submission request bodies"""

    @staticmethod
    def body(fill_a: Optional[str] = None, fill_b: Optional[str] = None) -> Dict[str, str]:
        return {
            "fillA": fill_a if fill_a is not None else fake.pystr(min_chars=1, max_chars=24),
            "fillB": fill_b if fill_b is not None else fake.pystr(min_chars=1, max_chars=24),
        }

    @staticmethod
    def device_id() -> str:
        return fake.uuid4()
