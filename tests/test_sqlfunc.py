import sqlite3

import pytest

from newton_irr.sqlfunc import register, sql_irr


@pytest.fixture
def conn():
    c = sqlite3.connect(":memory:")
    register(c)
    yield c
    c.close()


def test_sql_irr_direct():
    assert abs(sql_irr("-100, 110") - 0.10) < 1e-6
    assert sql_irr(None) is None


def test_select_documented_example(conn):
    (direct,) = conn.execute("SELECT IRR('-3000, 1850, 1400, 1000')").fetchone()
    assert direct == sql_irr("-3000, 1850, 1400, 1000")
    assert 0.0 < direct < 1.0


def test_null_column(conn):
    conn.execute("CREATE TABLE deals (flows TEXT)")
    conn.executemany("INSERT INTO deals VALUES (?)", [("-100, 110",), (None,)])
    rows = conn.execute("SELECT IRR(flows) FROM deals ORDER BY rowid").fetchall()
    assert abs(rows[0][0] - 0.10) < 1e-6
    assert rows[1][0] is None


@pytest.mark.parametrize("flows", ["-100", "100, -50", "-100, abc", "-100, 300"])
def test_errors_surface_through_the_database(conn, flows):
    with pytest.raises(sqlite3.OperationalError):
        conn.execute("SELECT IRR(?)", (flows,)).fetchone()


def test_custom_name():
    c = sqlite3.connect(":memory:")
    register(c, name="NEWTON_IRR")
    (r,) = c.execute("SELECT NEWTON_IRR('-100, 110')").fetchone()
    assert abs(r - 0.10) < 1e-6
    c.close()
