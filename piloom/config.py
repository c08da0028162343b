import os
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidInputError


@dataclass(frozen=True)
class Settings:
    default_digits: int = 1000
    max_workers: int = 32
    # (6k)! for the largest index must fit in this many bits
    max_term_bits: int = 1 << 36
    tail_digits: int = 50


DEFAULT_SETTINGS = Settings()


def available_cpus() -> int:
    if hasattr(os, "sched_getaffinity"):
        try:
            return max(1, len(os.sched_getaffinity(0)))
        except OSError:
            pass
    return os.cpu_count() or 1


def _positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidInputError(f"{name} must be >= 1, got {value}")
    return value


def resolve_digits(requested: Optional[int], settings: Settings = DEFAULT_SETTINGS) -> int:
    if requested is None:
        return settings.default_digits
    return _positive_int(requested, "digits")


def resolve_workers(requested: Optional[int], settings: Settings = DEFAULT_SETTINGS) -> int:
    if requested is None:
        return max(1, min(available_cpus(), settings.max_workers))
    return _positive_int(requested, "workers")
