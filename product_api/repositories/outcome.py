"""
Tagged results of data-access calls.

Repositories never raise for store problems: every call returns exactly one
of `Success`, `NotFound` or `Failure`, so callers cannot confuse an absent
record with an error or with an empty result.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class Failure:
    message: str


Outcome = Union[Success[T], NotFound, Failure]
