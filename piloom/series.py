import logging
import math
import multiprocessing
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ComputationCancelled, ResourceExhaustedError
from .partition import WorkRange
from .planner import working_context


logger = logging.getLogger(__name__)

_A = 13591409
_B = 545140134
_C = 640320
_NEG_C = -_C
_LN2 = math.log(2)


@dataclass(frozen=True)
class PartialSum:
    work_range: WorkRange
    # raw mpf tuple; context-bound mpf instances do not pickle
    raw: tuple

    def as_mpf(self, ctx):
        return ctx.make_mpf(self.raw)


def term(k: int) -> Tuple[int, int]:
    if k < 0:
        raise ValueError("k must be >= 0")
    three_k = 3 * k
    numerator = math.factorial(6 * k) * (_A + _B * k)
    # sign carried by (-640320) ** 3k
    denominator = math.factorial(three_k) * math.factorial(k) ** 3 * _NEG_C**three_k
    return numerator, denominator


def term_bits(k: int) -> int:
    if k < 1:
        return 1
    return int(math.lgamma(6 * k + 1) / _LN2) + 1


def check_term_budget(k: int, max_term_bits: Optional[int]):
    if max_term_bits is None:
        return
    bits = term_bits(k)
    if bits > max_term_bits:
        raise ResourceExhaustedError(
            f"term {k} needs about {bits} bits for (6k)!, limit is {max_term_bits}"
        )


def evaluate_range(
    work_range: WorkRange,
    bit_precision: int,
    cancel=None,
    max_term_bits: Optional[int] = None,
) -> PartialSum:
    ctx = working_context(bit_precision)
    total = ctx.zero
    if not work_range:
        return PartialSum(work_range, total._mpf_)
    check_term_budget(work_range.end - 1, max_term_bits)
    name = multiprocessing.current_process().name
    logger.debug("%s: summing terms [%d, %d)", name, work_range.start, work_range.end)
    try:
        for k in work_range:
            if cancel is not None and cancel.is_set():
                raise ComputationCancelled(f"{name} cancelled at term {k}")
            numerator, denominator = term(k)
            total += ctx.fdiv(numerator, denominator)
    except MemoryError as exc:
        if isinstance(exc, ResourceExhaustedError):
            raise
        raise ResourceExhaustedError(
            f"out of memory evaluating terms [{work_range.start}, {work_range.end})"
        ) from exc
    logger.debug("%s: finished [%d, %d)", name, work_range.start, work_range.end)
    return PartialSum(work_range, total._mpf_)
