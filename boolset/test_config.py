import logging

import pytest

from boolset.config import Config, load_config, get_config, set_config

pytestmark = pytest.mark.usefixtures("fresh_config")


def test_defaults():
    config = load_config({})
    assert config == Config()
    assert config.check_invariants is False
    assert config.log_level == 'WARNING'
    assert config.logging_level == logging.WARNING
    assert config.max_materialize == 1_000_000


def test_load_from_environment():
    config = load_config({
        'BOOLSET_CHECK_INVARIANTS': 'yes',
        'BOOLSET_LOG_LEVEL': 'debug',
        'BOOLSET_MAX_MATERIALIZE': '10_000',
    })
    assert config.check_invariants is True
    assert config.logging_level == logging.DEBUG
    assert config.max_materialize == 10_000


@pytest.mark.parametrize("environ", [
    {'BOOLSET_CHECK_INVARIANTS': 'maybe'},
    {'BOOLSET_LOG_LEVEL': 'loud'},
    {'BOOLSET_MAX_MATERIALIZE': 'lots'},
    {'BOOLSET_MAX_MATERIALIZE': '-5'},
])
def test_invalid_environment(environ):
    with pytest.raises(ValueError):
        load_config(environ)


def test_invalid_fields():
    with pytest.raises(ValueError):
        Config(log_level='VERBOSE')
    with pytest.raises(ValueError):
        Config(max_materialize=True)


def test_active_config_is_loaded_lazily(monkeypatch):
    monkeypatch.setenv('BOOLSET_CHECK_INVARIANTS', '1')
    assert get_config().check_invariants is True
    monkeypatch.setenv('BOOLSET_CHECK_INVARIANTS', '0')
    # cached until reset
    assert get_config().check_invariants is True
    set_config(None)
    assert get_config().check_invariants is False


def test_set_config():
    config = Config(max_materialize=5)
    set_config(config)
    assert get_config() is config
