import json

import pytest

from newton_irr import cli


def test_cli_text_output(capsys):
    rc = cli.main(["--cashflows=-100, 110"])
    assert rc == 0
    out = capsys.readouterr().out
    assert out.startswith("IRR: 0.10000")
    assert "10.0000%" in out


def test_cli_json_output(capsys):
    rc = cli.main(["--cashflows=-3000, 1850, 1400, 1000", "--format", "json"])
    assert rc == 0
    obj = json.loads(capsys.readouterr().out)
    assert obj["converged"] is True
    assert obj["cashflows"] == [-3000.0, 1850.0, 1400.0, 1000.0]
    assert 0.0 < obj["irr"] < 1.0


def test_cli_config_file_and_flag_override(tmp_path, capsys):
    cfg = tmp_path / "case.yaml"
    cfg.write_text("solver: { max_iterations: 1 }\ncashflows: [-100, 60, 60]\n", encoding="utf-8")
    rc = cli.main(["--config", str(cfg), "--format", "json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out)["iterations"] == 1

    rc = cli.main(["--config", str(cfg), "--max-iterations", "500", "--format", "json"])
    assert rc == 0
    obj = json.loads(capsys.readouterr().out)
    assert obj["converged"] is True
    assert obj["iterations"] > 1


def test_cli_unconverged_text_warns(capsys):
    rc = cli.main(["--cashflows=-100, 60, 60", "--max-iterations", "1"])
    assert rc == 0
    assert "not converged" in capsys.readouterr().err


def test_cli_command_line_flows_win_over_config(tmp_path, capsys):
    cfg = tmp_path / "case.yaml"
    cfg.write_text("cashflows: [-100, 60, 60]\n", encoding="utf-8")
    rc = cli.main(["--config", str(cfg), "--cashflows=-100, 110", "--format", "json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out)["cashflows"] == [-100.0, 110.0]


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--cashflows=-100"],
        ["--cashflows=100, -50"],
        ["--cashflows=-100, abc"],
        ["--cashflows=-100, 110", "--tolerance", "0"],
        ["--config", "does/not/exist.yaml"],
    ],
)
def test_cli_invalid_input_exits_2(argv, capsys):
    assert cli.main(argv) == 2
    assert "ERROR" in capsys.readouterr().err


def test_cli_calculation_failure_exits_1(capsys):
    assert cli.main(["--cashflows=-100, 300"]) == 1
    assert "failed to calculate IRR" in capsys.readouterr().err


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def test_cli_allow_non_finite(capsys):
    assert cli.main(["--cashflows=0, 100"]) == 1
    capsys.readouterr()
    assert cli.main(["--cashflows=0, 100", "--allow-non-finite", "--format", "json"]) == 0
    # strict JSON: a NaN rate is written as null
    obj = json.loads(capsys.readouterr().out, parse_constant=_reject_constant)
    assert obj["irr"] is None
    assert obj["converged"] is False


def test_cli_out_of_bounds_rate_is_a_failure(capsys):
    flows = "--cashflows=-41.43198561607812, -65.39851968418981, 9.759752277630596"
    assert cli.main([flows]) == 1
    assert "outside iteration bounds" in capsys.readouterr().err

    assert cli.main([flows, "--allow-non-finite", "--format", "json"]) == 0
    obj = json.loads(capsys.readouterr().out, parse_constant=_reject_constant)
    assert obj["converged"] is False
    assert obj["irr"] < -2147483648.0


def test_cli_invalid_format_exits_2():
    # argparse enforces choices
    with pytest.raises(SystemExit) as ei:
        cli.parse_args(["--format", "nope"])
    assert ei.value.code == 2
