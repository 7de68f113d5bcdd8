import pytest

from calculator_engine import CalculatorEngine
from config import Settings, load_settings
from operations import AngleMode


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings({})
        assert settings == Settings()
        assert settings.angle_mode is AngleMode.DEG

    def test_reads_environment(self):
        settings = load_settings({
            "CALC_ANGLE_MODE": "rad",
            "CALC_START_MODE": "Scientific",
            "CALC_RANDOM_SEED": "42",
            "CALC_LOG_LEVEL": "debug",
            "CALC_LOG_FILE": "/tmp/calc.log",
        })
        assert settings.angle_mode is AngleMode.RAD
        assert settings.start_mode == "scientific"
        assert settings.random_seed == 42
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "/tmp/calc.log"

    def test_empty_log_file_means_none(self):
        assert load_settings({"CALC_LOG_FILE": ""}).log_file is None

    @pytest.mark.parametrize("environ", [
        {"CALC_ANGLE_MODE": "turns"},
        {"CALC_START_MODE": "graphing"},
        {"CALC_RANDOM_SEED": "abc"},
        {"CALC_LOG_LEVEL": "loud"},
    ])
    def test_invalid_values(self, environ):
        with pytest.raises(ValueError):
            load_settings(environ)


class TestEngineSettings:
    def test_initial_angle_mode(self):
        engine = CalculatorEngine(Settings(angle_mode=AngleMode.GRAD))
        assert engine.angle_mode is AngleMode.GRAD
        assert engine.state.angle_mode is AngleMode.GRAD

    def test_random_seed_is_reproducible(self):
        first = CalculatorEngine(Settings(random_seed=7))
        second = CalculatorEngine(Settings(random_seed=7))
        first.apply_function("rand")
        second.apply_function("rand")
        assert first.display == second.display
