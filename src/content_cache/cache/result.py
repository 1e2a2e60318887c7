from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from .errors import CacheError


@dataclass(frozen=True)
class Hit:
    value: Any


@dataclass(frozen=True)
class Miss:
    pass


@dataclass(frozen=True)
class Unavailable:
    """The lookup could not be answered; callers see it as a miss."""

    reason: str
    error: Optional[CacheError] = None


MISS = Miss()

LookupResult = Union[Hit, Miss, Unavailable]
