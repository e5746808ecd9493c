import pytest

from arcade_snake.config import BOUNDED, HUD_HEIGHT, TOROIDAL, Config
from arcade_snake.main import parse_args


def test_defaults():
    cfg = Config()
    assert cfg.grid_size == 20
    assert cfg.boundary == BOUNDED
    assert (cfg.base_timestep_ms, cfg.min_timestep_ms, cfg.timestep_decrement_ms) == (150, 50, 2)
    assert cfg.food_bonus == 10


@pytest.mark.parametrize(
    "kwargs",
    [
        {"grid_size": 3},
        {"boundary": "mobius"},
        {"min_timestep_ms": 0},
        {"base_timestep_ms": 40},
        {"timestep_decrement_ms": -1},
        {"food_bonus": -10},
        {"cell_size": 0},
        {"fps": 0},
    ],
)
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)


def test_window_size_includes_the_hud():
    cfg = Config(grid_size=10, cell_size=16)
    assert cfg.window_size == (160, 160 + HUD_HEIGHT)


def test_parse_args_builds_config():
    cfg = parse_args(["--wrap", "--grid", "10", "--seed", "3"])
    assert cfg == Config(boundary=TOROIDAL, grid_size=10, seed=3)


def test_parse_args_defaults_to_walls():
    assert parse_args([]).boundary == BOUNDED


@pytest.mark.parametrize(
    "argv",
    [["--timestep", "40"], ["--grid", "2"], ["--cell-size", "0"], ["--fps", "-5"]],
)
def test_parse_args_reports_bad_flags_as_usage_errors(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(argv)
    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err
