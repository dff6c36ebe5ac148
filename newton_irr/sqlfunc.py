# newton_irr/sqlfunc.py
"""
SQL binding: IRR over a comma-separated text column.

    conn = sqlite3.connect(":memory:")
    register(conn)
    conn.execute("SELECT IRR('-3000, 1850, 1400, 1000')").fetchone()
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from .finance.irr import irr
from .parsing import parse_cash_flows

logger = logging.getLogger("newton_irr.sqlfunc")


def sql_irr(values: Optional[str]) -> Optional[float]:
    # NULL in, NULL out; any other failure is left for the database to report
    if values is None:
        return None
    return irr(parse_cash_flows(values))


def register(connection: sqlite3.Connection, name: str = "IRR") -> None:
    connection.create_function(name, 1, sql_irr, deterministic=True)
    logger.debug("registered SQL function %s", name)


__all__ = ["sql_irr", "register"]
