import pytest

from securebox.cli import load_config, main


def test_opens_box(capsys):
    assert main(["4", "5", "--seed", "3"]) == 0
    assert capsys.readouterr().out.strip().endswith("BOX: OPENED!")


def test_reports_locked_box(tmp_path, capsys):
    cfg = tmp_path / "run.yaml"
    cfg.write_text("seed: 1\nstrategy: cross_cover\nshuffle_iterations: 1\n")
    assert main(["3", "3", "--config", str(cfg)]) == 1
    assert capsys.readouterr().out.strip() == "BOX: LOCKED!"


def test_command_line_overrides_config(tmp_path, capsys):
    cfg = tmp_path / "run.yaml"
    cfg.write_text("seed: 1\nstrategy: cross_cover\nshuffle_iterations: 1\n")
    assert main(["3", "3", "--config", str(cfg), "--strategy", "reduced"]) == 0
    assert capsys.readouterr().out.strip() == "BOX: OPENED!"


def test_verbose_and_show(capsys):
    assert main(["2", "2", "--seed", "0", "--verbose", "--show"]) == 0
    out = capsys.readouterr().out
    assert "[solve] 2x2 strategy=reduced" in out
    assert "00\n00" in out


def test_empty_box_opens(capsys):
    assert main(["0", "0"]) == 0
    assert "BOX: OPENED!" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv", [["3"], ["a", "3"], ["-1", "3"], ["2", "2", "--strategy", "greedy"]]
)
def test_bad_arguments_exit_with_usage_error(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_full_strategy_too_large_is_usage_error(tmp_path):
    cfg = tmp_path / "run.yaml"
    cfg.write_text("strategy: full\nparams:\n  max_cells: 4\n")
    with pytest.raises(SystemExit) as exc:
        main(["3", "3", "--config", str(cfg)])
    assert exc.value.code == 2


def test_load_config(tmp_path):
    assert load_config(None) == {}
    cfg = tmp_path / "run.yaml"
    cfg.write_text("seed: 7\nparams: {max_cells: 9}\n")
    assert load_config(str(cfg)) == {"seed": 7, "params": {"max_cells": 9}}


def test_load_config_rejects_non_mapping(tmp_path):
    cfg = tmp_path / "run.yaml"
    cfg.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(str(cfg))
