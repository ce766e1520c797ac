import pytest

from brewhouse.core.exceptions import ConfigurationError
from config.app_config import BrewhouseConfig, DEFAULT_PROCESSES, _split


def test_defaults():
    cfg = BrewhouseConfig()
    assert cfg.processes == DEFAULT_PROCESSES
    assert cfg.tail_limit == 50
    assert cfg.tz.key == "UTC"


@pytest.mark.parametrize("kwargs", [
    {"processes": ()},
    {"processes": ("gaerung", "gaerung")},
    {"sample_interval": 0},
    {"tail_limit": -1},
    {"store_timeout": 0},
    {"timezone": "Mars/Olympus_Mons"},
])
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        BrewhouseConfig(**kwargs)


def test_process_list_parsing():
    assert _split(" gaerung, maischen ,,hopfenkochen ") == DEFAULT_PROCESSES


def test_from_settings_reads_environment(monkeypatch):
    from config import app_config

    monkeypatch.setattr(app_config.settings, "PROCESSES", ("a", "b"))
    monkeypatch.setattr(app_config.settings, "TAIL_LIMIT", 10)
    monkeypatch.setattr(app_config.settings, "GENERATOR_SEED", "5")
    cfg = BrewhouseConfig.from_settings()
    assert cfg.processes == ("a", "b")
    assert cfg.tail_limit == 10
    assert cfg.generator_seed == 5


def test_from_settings_rejects_bad_seed(monkeypatch):
    from config import app_config

    monkeypatch.setattr(app_config.settings, "GENERATOR_SEED", "abc")
    with pytest.raises(ConfigurationError):
        BrewhouseConfig.from_settings()
