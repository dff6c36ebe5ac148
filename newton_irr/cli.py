# newton_irr/cli.py
from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_CONFIG, SolverConfig, config_from_mapping, load_solver_config
from .errors import CashFlowParseError, InvalidInputError, IrrCalculationError
from .finance.irr import NewtonRaphsonIrrSolver
from .parsing import parse_cash_flows

EXIT_OK = 0
EXIT_CALCULATION_FAILED = 1
EXIT_INVALID_INPUT = 2


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="newton_irr",
        description="Internal rate of return of a periodic cash-flow series (Newton-Raphson).",
    )
    p.add_argument(
        "--cashflows",
        default=None,
        help='Comma-separated cash flows, first one the investment. Use --cashflows="-3000, 1850, 1400, 1000".',
    )
    p.add_argument(
        "--config",
        default=None,
        help="YAML file with optional 'solver' settings and a 'cashflows' list.",
    )
    p.add_argument("--max-iterations", type=int, default=None, help="Override the iteration cap.")
    p.add_argument("--tolerance", type=float, default=None, help="Override the convergence tolerance.")
    p.add_argument(
        "--allow-non-finite",
        action="store_true",
        help="Return a NaN/inf or out-of-bounds rate instead of failing.",
    )
    p.add_argument(
        "--format",
        dest="fmt",
        default="text",
        choices=["text", "json"],
        help="Output format (default: text).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log solver progress to stderr.")
    return p.parse_args(argv)


def _resolve(ns: argparse.Namespace) -> tuple[SolverConfig, Optional[List[float]]]:
    config = DEFAULT_CONFIG
    cashflows: Optional[List[float]] = None
    if ns.config:
        config, cashflows = load_solver_config(Path(ns.config).resolve())

    # flags override file values
    overrides = {"max_iterations": ns.max_iterations, "tolerance": ns.tolerance}
    if ns.allow_non_finite:
        overrides["reject_non_finite"] = False
    config = config_from_mapping(overrides, base=config)

    if ns.cashflows is not None:
        cashflows = list(parse_cash_flows(ns.cashflows))
    return config, cashflows


def main(argv: list[str] | None = None) -> int:
    ns = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config, cashflows = _resolve(ns)
    except (CashFlowParseError, ValueError, TypeError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    if cashflows is None:
        print("ERROR: no cash flows given (use --cashflows or a config with 'cashflows')", file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        result = NewtonRaphsonIrrSolver(cashflows, config).solve_detailed()
    except InvalidInputError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except IrrCalculationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CALCULATION_FAILED

    if ns.fmt == "json":
        print(
            json.dumps(
                {
                    "irr": result.rate if math.isfinite(result.rate) else None,
                    "iterations": result.iterations,
                    "converged": result.converged,
                    "cashflows": [cf if math.isfinite(cf) else None for cf in cashflows],
                },
                allow_nan=False,
            )
        )
    else:
        print(f"IRR: {result.rate:.10f} ({result.rate * 100.0:.4f}%)")
        if not result.converged:
            print(f"WARNING: not converged after {result.iterations} iterations", file=sys.stderr)
    return EXIT_OK


__all__ = ["main", "parse_args"]
