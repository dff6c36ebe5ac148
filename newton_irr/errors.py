# newton_irr/errors.py
from __future__ import annotations


class IrrError(Exception):
    """Base class for every error raised by newton_irr."""


class InvalidInputError(IrrError, ValueError):
    """Cash-flow series rejected before any iteration ran."""


class IrrCalculationError(IrrError):
    """Iteration finished but produced no usable rate."""


class CashFlowParseError(IrrError, ValueError):
    pass


__all__ = ["IrrError", "InvalidInputError", "IrrCalculationError", "CashFlowParseError"]
