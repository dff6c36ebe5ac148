"""
Finance core.

Design:
- IRR/NPV implementations live only in newton_irr.finance.irr (singleton).
- Nothing else in the package may *define* irr/npv (no 'def irr' / 'def npv').
"""
from .irr import (  # re-exports only
    CashFlowSeries as CashFlowSeries,
    IrrResult as IrrResult,
    NewtonRaphsonIrrSolver as NewtonRaphsonIrrSolver,
    irr as irr,
    npv as npv,
    npv_derivative as npv_derivative,
    solve as solve,
)

__all__ = ["CashFlowSeries", "IrrResult", "NewtonRaphsonIrrSolver", "irr", "npv", "npv_derivative", "solve"]
