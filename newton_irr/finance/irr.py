# newton_irr/finance/irr.py
"""
Periodic IRR by Newton-Raphson.

    P(r)  =  sum_{j=0..n-1} CF[j] / (1+r)^j
    P'(r) = -sum_{i=1..n-1} i * CF[i] / (1+r)^i      (negated-sum convention)
    r'    =  r - P(r) / P'(r)

Iteration starts from g0 = -(1 + CF[1]/CF[0]) and stops once |P(r')| <= tolerance
or the iteration cap is reached. A final rate above 1 (over 100% per period) is
reported as IrrCalculationError.

All arithmetic is float64 under numpy so a zero derivative or an overflowing
discount factor gives inf/NaN instead of a Python exception.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from ..config import DEFAULT_CONFIG, SolverConfig
from ..errors import InvalidInputError, IrrCalculationError

logger = logging.getLogger("newton_irr.finance.irr")

MIN_CASH_FLOW_PERIODS = 2

# Iterates must stay strictly inside the 32-bit signed integer range.
_INT32_MIN = -2147483648.0
_INT32_MAX = 2147483647.0

_CALCULATION_FAILED = "failed to calculate IRR for the given cash flow series; provide a valid sequence"


# ---------- Cash-flow series ----------
@dataclass(frozen=True)
class CashFlowSeries:
    """Ordered, immutable period amounts; index is the period number."""

    values: Tuple[float, ...]

    def __init__(self, cashflows: Iterable[float]) -> None:
        object.__setattr__(self, "values", tuple(float(x) for x in cashflows))

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i: int) -> float:
        return self.values[i]

    def as_array(self) -> np.ndarray:
        return np.asarray(self.values, dtype=np.float64)

    def validate(self) -> "CashFlowSeries":
        if len(self.values) < MIN_CASH_FLOW_PERIODS:
            raise InvalidInputError("at least two cash flow periods required")
        # zero is accepted; only a positive opening flow is rejected
        if self.values[0] > 0:
            raise InvalidInputError("first period cash flow must be negative")
        return self


@dataclass
class SolverState:
    estimated_rate: float
    iteration_count: int = 0
    result: float = 0.0


@dataclass(frozen=True)
class IrrResult:
    """
    Outcome of one solve.
    `converged` is False when the iteration cap was hit first or when `rate`
    left the iteration bounds; `rate` is then the last iterate and is NOT
    guaranteed to satisfy |P(rate)| <= tolerance.
    """

    rate: float
    iterations: int
    converged: bool


# ---------- Polynomial ----------
def is_valid_iteration_bounds(rate: float) -> bool:
    """False for -1, NaN, and anything outside the open int32 range."""
    return rate != -1.0 and _INT32_MIN < rate < _INT32_MAX


def _npv(rate: float, flows: np.ndarray) -> np.float64:
    if not is_valid_iteration_bounds(rate):
        return np.float64(0.0)
    periods = np.arange(flows.size)
    with np.errstate(all="ignore"):
        return np.sum(flows / np.power(np.float64(1.0) + rate, periods))


def _npv_derivative(rate: float, flows: np.ndarray) -> np.float64:
    if not is_valid_iteration_bounds(rate):
        return np.float64(0.0)
    periods = np.arange(1, flows.size)
    with np.errstate(all="ignore"):
        return -np.sum(flows[1:] * periods / np.power(np.float64(1.0) + rate, periods))


def npv(rate: float, cashflows: Iterable[float]) -> float:
    """
    Classic discounted cash flow:
        NPV(r) = sum_{t=0..N} CF[t] / (1+r)^t
    Returns 0.0 when `rate` fails is_valid_iteration_bounds.
    """
    return float(_npv(float(rate), np.asarray(list(cashflows), dtype=np.float64)))


def npv_derivative(rate: float, cashflows: Iterable[float]) -> float:
    """-sum_{i>=1} i * CF[i] / (1+r)^i, with the same bounds guard as npv()."""
    return float(_npv_derivative(float(rate), np.asarray(list(cashflows), dtype=np.float64)))


def initial_guess(cashflows: Iterable[float]) -> float:
    flows = np.asarray(list(cashflows), dtype=np.float64)
    with np.errstate(all="ignore"):
        return float(-1.0 * (1.0 + flows[1] / flows[0]))


# ---------- Solver ----------
class NewtonRaphsonIrrSolver:
    """
    One instance per cash-flow series. Every solve() builds its own SolverState,
    so repeated or concurrent calls never share an iterate.
    """

    def __init__(self, cashflows: Iterable[float], config: SolverConfig = DEFAULT_CONFIG) -> None:
        self._series = cashflows if isinstance(cashflows, CashFlowSeries) else CashFlowSeries(cashflows)
        self._config = config

    @property
    def config(self) -> SolverConfig:
        return self._config

    def solve(self) -> float:
        return self.solve_detailed().rate

    def solve_detailed(self) -> IrrResult:
        flows = self._series.validate().as_array()
        state = SolverState(estimated_rate=initial_guess(flows))
        logger.debug("IRR solve: %d periods, initial guess %r", flows.size, state.estimated_rate)

        converged = self._iterate(state, flows)
        # the guarded NPV is 0 outside the bounds, so "converging" there proves nothing
        in_bounds = is_valid_iteration_bounds(state.result)
        converged = converged and in_bounds

        if state.result > 1:
            logger.warning("IRR rejected: rate %r exceeds 1 after %d iterations", state.result, state.iteration_count)
            raise IrrCalculationError(_CALCULATION_FAILED)
        if self._config.reject_non_finite and not math.isfinite(state.result):
            logger.warning("IRR rejected: non-finite rate %r after %d iterations", state.result, state.iteration_count)
            raise IrrCalculationError(f"{_CALCULATION_FAILED} (iteration produced {state.result!r})")
        if self._config.reject_non_finite and not in_bounds:
            logger.warning("IRR rejected: rate %r outside iteration bounds after %d iterations", state.result, state.iteration_count)
            raise IrrCalculationError(f"{_CALCULATION_FAILED} (rate {state.result!r} outside iteration bounds)")

        logger.debug("IRR solve done: rate=%r iterations=%d converged=%s", state.result, state.iteration_count, converged)
        return IrrResult(rate=state.result, iterations=state.iteration_count, converged=converged)

    def _iterate(self, state: SolverState, flows: np.ndarray) -> bool:
        cfg = self._config
        while True:
            rate = state.estimated_rate
            if not is_valid_iteration_bounds(rate):
                logger.warning("estimate %r outside iteration bounds; NPV and derivative taken as 0", rate)
            with np.errstate(all="ignore"):
                state.result = float(rate - _npv(rate, flows) / _npv_derivative(rate, flows))
            state.iteration_count += 1

            if abs(_npv(state.result, flows)) <= cfg.tolerance:
                return True
            if state.iteration_count >= cfg.max_iterations:
                logger.warning(
                    "IRR iteration cap (%d) reached without convergence; last iterate %r",
                    cfg.max_iterations,
                    state.result,
                )
                return False
            state.estimated_rate = state.result


def irr(cashflows: Iterable[float], config: Optional[SolverConfig] = None) -> float:
    """
    Periodic IRR of `cashflows` (first entry the non-positive investment).
    Returns a decimal rate (e.g., 0.18 = 18%).

    Raises InvalidInputError for fewer than two periods or a positive first flow,
    IrrCalculationError when the final iterate is above 1 (or non-finite or
    outside the iteration bounds, unless config.reject_non_finite is False).
    """
    return NewtonRaphsonIrrSolver(cashflows, config or DEFAULT_CONFIG).solve()


solve = irr

__all__ = [
    "CashFlowSeries",
    "IrrResult",
    "NewtonRaphsonIrrSolver",
    "SolverState",
    "initial_guess",
    "irr",
    "is_valid_iteration_bounds",
    "npv",
    "npv_derivative",
    "solve",
]
