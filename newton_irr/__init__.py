"""Newton-Raphson internal rate of return for periodic cash flows."""
from .config import DEFAULT_CONFIG, SolverConfig, load_solver_config
from .errors import CashFlowParseError, InvalidInputError, IrrCalculationError, IrrError
from .finance.irr import IrrResult, NewtonRaphsonIrrSolver, irr, npv, solve
from .parsing import parse_cash_flows

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "CashFlowParseError",
    "InvalidInputError",
    "IrrCalculationError",
    "IrrError",
    "IrrResult",
    "NewtonRaphsonIrrSolver",
    "SolverConfig",
    "irr",
    "load_solver_config",
    "npv",
    "parse_cash_flows",
    "solve",
]
