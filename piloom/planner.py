import logging
import math
from dataclasses import dataclass

from mpmath.ctx_mp import MPContext

from .errors import InvalidInputError


logger = logging.getLogger(__name__)

# log2(10)
BITS_PER_DECIMAL_DIGIT = 3.321928094887362
# Decimal digits gained per Chudnovsky term: log10(640320**3 / 1728)
DIGITS_PER_TERM = 14.181647462725478
LIMB_BITS = 64


@dataclass(frozen=True)
class PrecisionPlan:
    decimal_digits: int
    bit_precision: int
    iteration_count: int

    @property
    def working_precision(self) -> int:
        limbs = -(-self.bit_precision // LIMB_BITS)
        return (limbs + 1) * LIMB_BITS


def plan(decimal_digits: int) -> PrecisionPlan:
    if isinstance(decimal_digits, bool) or not isinstance(decimal_digits, int):
        raise InvalidInputError(f"decimal digits must be an integer, got {decimal_digits!r}")
    if decimal_digits < 1:
        raise InvalidInputError(f"decimal digits must be >= 1, got {decimal_digits}")
    bit_precision = int(math.floor(decimal_digits * BITS_PER_DECIMAL_DIGIT)) + 1
    iteration_count = int(decimal_digits / DIGITS_PER_TERM) + 1
    result = PrecisionPlan(decimal_digits, bit_precision, iteration_count)
    logger.debug(
        "plan: %d digits -> %d bits (%d working), %d iterations",
        decimal_digits,
        bit_precision,
        result.working_precision,
        iteration_count,
    )
    return result


def working_context(bits: int) -> MPContext:
    ctx = MPContext()
    ctx.prec = int(bits)
    return ctx
