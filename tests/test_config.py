"""Tests for the configuration records."""

from __future__ import annotations

import dataclasses

import pytest

from gplot.config import EngineSettings, PlotConfig, replot_pause


def test_plot_config_is_immutable(make_config):
    config = make_config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.command = "splot"


def test_interactive_only_without_file_terminal(make_config):
    assert make_config().interactive
    assert not make_config(terminal="png").interactive


def test_replot_pause():
    assert replot_pause("10") == ("while (1) {", "    pause 10", "    replot", "}")


def test_engine_settings_defaults():
    settings = EngineSettings.from_env({})
    assert settings == EngineSettings(executable="gnuplot", terminal="x11", log_level="WARNING")


def test_engine_settings_from_environment():
    env = {"GPLOT_GNUPLOT": "/usr/local/bin/gnuplot", "GPLOT_TERMINAL": "qt", "GPLOT_LOG_LEVEL": "debug"}
    settings = EngineSettings.from_env(env)
    assert settings.executable == "/usr/local/bin/gnuplot"
    assert settings.terminal == "qt"
    assert settings.log_level == "DEBUG"


def test_empty_values_fall_back_to_defaults():
    assert EngineSettings.from_env({"GPLOT_GNUPLOT": "", "GPLOT_TERMINAL": ""}) == EngineSettings()


def test_plot_config_keyword_construction():
    config = PlotConfig(pattern="*.dat", plot_args=("w", "l"), directives=("set grid",))
    assert config.command == "plot"
    assert config.pause is None
