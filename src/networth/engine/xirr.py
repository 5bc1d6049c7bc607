"""Annualized internal rate of return for irregularly dated cashflows."""

import logging
import math
from typing import Iterable

from scipy import optimize

from networth.domain.models import Cashflow

logger = logging.getLogger(__name__)

LOWER_RATE = -0.9999
UPPER_RATE = 100.0
MAX_ITERATIONS = 100
RATE_TOLERANCE = 1e-12
DAYS_PER_YEAR = 365.0
# Cap on a single discounted flow, well below float max so sums stay finite
MAX_PRESENT_VALUE = 1e300


def _discounted(amount: float, rate: float, years: float) -> float:
    try:
        factor = math.pow(1.0 + rate, years)
    except OverflowError:
        # Discount factor beyond float range: the flow is worth nothing today
        return 0.0
    if factor == 0.0:
        # Underflow near -100%: the flow's present value is unbounded
        return math.copysign(MAX_PRESENT_VALUE, amount)
    try:
        value = amount / factor
    except OverflowError:
        value = math.copysign(math.inf, amount)
    return max(-MAX_PRESENT_VALUE, min(MAX_PRESENT_VALUE, value))


def _net_present_value(rate: float, flows: list[tuple[float, float]]) -> float:
    return sum(_discounted(amount, rate, years) for years, amount in flows)


def solve_xirr(cashflows: Iterable[Cashflow]) -> float:
    """
    Solve for the annualized return, in percent.

    Precondition: the flows change sign once (outflows first, then the
    terminal valuation). NPV is then decreasing in the rate and bisection
    over (-99.99%, 10000%) finds the single root. Flows with several sign
    changes may have more than one root; the result is then whichever root
    the bisection lands on.

    Zero, non-finite and undated flows are dropped. Fewer than two usable
    flows yield 0. When NPV keeps one sign over the whole bracket there is
    no root and the bound bisection converges to is returned. After 100
    iterations without convergence the last estimate is returned.
    """
    usable = sorted(
        (cf for cf in cashflows if cf.on is not None and cf.amount and math.isfinite(cf.amount)),
        key=lambda cf: cf.on,
    )
    if len(usable) < 2:
        return 0.0

    base = usable[0].on
    flows = [((cf.on - base).days / DAYS_PER_YEAR, cf.amount) for cf in usable]

    at_lower = _net_present_value(LOWER_RATE, flows)
    at_upper = _net_present_value(UPPER_RATE, flows)
    if not (math.isfinite(at_lower) and math.isfinite(at_upper)):
        logger.debug("Non-finite NPV at bracket bounds; XIRR reported as 0")
        return 0.0
    if at_lower * at_upper > 0:
        logger.debug("No XIRR root in bracket; NPV at lower bound is %s", at_lower)
        return (LOWER_RATE if at_lower < 0 else UPPER_RATE) * 100

    rate, result = optimize.bisect(
        _net_present_value,
        LOWER_RATE,
        UPPER_RATE,
        args=(flows,),
        xtol=RATE_TOLERANCE,
        maxiter=MAX_ITERATIONS,
        full_output=True,
        disp=False,
    )
    if not result.converged:
        logger.debug("XIRR did not converge after %d iterations", result.iterations)
    return rate * 100
