import logging
import multiprocessing
from concurrent.futures import FIRST_EXCEPTION, ProcessPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Optional, Sequence

from mpmath import nstr

from .config import DEFAULT_SETTINGS, Settings, resolve_digits, resolve_workers
from .errors import ComputationCancelled, InvalidInputError
from .partition import partition
from .planner import PrecisionPlan, plan, working_context
from .series import PartialSum, check_term_budget, evaluate_range


logger = logging.getLogger(__name__)

_L_RADICAND = 10005
_L_FACTOR = 426880
# at least one extra series term beyond the requested digits
GUARD_DIGITS = 15


@dataclass(frozen=True)
class Result:
    decimal_digits: int
    plan: PrecisionPlan
    workers: int
    value: object
    digits: str
    exponent: int

    @property
    def text(self) -> str:
        head = self.digits[: self.exponent]
        tail = self.digits[self.exponent :]
        return head + "." + tail if tail else head

    def tail(self, count: int) -> str:
        count = int(count)
        if count < 1:
            return ""
        return self.digits[-count:]


def run_plan(decimal_digits: int) -> PrecisionPlan:
    requested = plan(decimal_digits)
    return plan(requested.decimal_digits + GUARD_DIGITS)


def reduce(partial_sums: Sequence[PartialSum], bit_precision: int):
    ctx = working_context(bit_precision)
    total = ctx.zero
    for partial in partial_sums:
        total += partial.as_mpf(ctx)
    if not total:
        raise InvalidInputError("no series terms were evaluated")
    scale = ctx.sqrt(_L_RADICAND) * _L_FACTOR
    return ctx.fdiv(1, total) * scale


def decimal_digits_of(value, decimal_digits: int):
    s = nstr(value, decimal_digits + 30, strip_zeros=False, min_fixed=-(10**6), max_fixed=10**6)
    head, _, tail = s.partition(".")
    head = head.lstrip("-")
    wanted = decimal_digits + 1 - len(head)
    tail = (tail + "0" * wanted)[:wanted] if wanted > 0 else ""
    return head + tail, len(head)


def _collect(futures) -> List[PartialSum]:
    partials = []
    failure = None
    for future in futures:
        exc = future.exception()
        if exc is None:
            partials.append(future.result())
        elif failure is None or isinstance(failure, ComputationCancelled):
            failure = exc
    if failure is not None:
        raise failure
    return partials


def _run_pool(ranges, bits: int, settings: Settings, cancel, evaluate) -> List[PartialSum]:
    with ProcessPoolExecutor(max_workers=len(ranges)) as executor:
        futures = [
            executor.submit(evaluate, work_range, bits, cancel, settings.max_term_bits)
            for work_range in ranges
        ]
        try:
            _, pending = wait(futures, return_when=FIRST_EXCEPTION)
        except BaseException:
            cancel.set()
            raise
        if pending:
            logger.debug("worker failed, cancelling %d pending ranges", len(pending))
            cancel.set()
    # every worker has exited here
    return _collect(futures)


def run_workers(
    precision_plan: PrecisionPlan,
    workers: int,
    settings: Settings = DEFAULT_SETTINGS,
    cancel=None,
    evaluate=evaluate_range,
) -> List[PartialSum]:
    ranges = partition(precision_plan.iteration_count, workers)
    if precision_plan.iteration_count:
        check_term_budget(precision_plan.iteration_count - 1, settings.max_term_bits)
    bits = precision_plan.working_precision
    if workers == 1:
        return [evaluate(ranges[0], bits, cancel, settings.max_term_bits)]
    if cancel is None:
        with multiprocessing.Manager() as manager:
            return _run_pool(ranges, bits, settings, manager.Event(), evaluate)
    return _run_pool(ranges, bits, settings, cancel, evaluate)


def compute_pi(
    decimal_digits: Optional[int] = None,
    workers: Optional[int] = None,
    settings: Optional[Settings] = None,
    cancel=None,
) -> Result:
    settings = settings or DEFAULT_SETTINGS
    digits = resolve_digits(decimal_digits, settings)
    workers = resolve_workers(workers, settings)
    precision_plan = run_plan(digits)
    logger.info(
        "Starting summing: %d digits - %d iterations - %d processes",
        digits,
        precision_plan.iteration_count,
        workers,
    )
    partials = run_workers(precision_plan, workers, settings, cancel)
    logger.info("Starting final steps")
    value = reduce(partials, precision_plan.working_precision)
    text, exponent = decimal_digits_of(value, digits)
    return Result(digits, precision_plan, workers, value, text, exponent)
