from typing import Mapping, Optional
from dataclasses import dataclass
import logging
import os

################################################################################
# Config
################################################################################

ENV_CHECK_INVARIANTS = 'BOOLSET_CHECK_INVARIANTS'
ENV_LOG_LEVEL = 'BOOLSET_LOG_LEVEL'
ENV_MAX_MATERIALIZE = 'BOOLSET_MAX_MATERIALIZE'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class Config:
    # Re-validate the range collection after every mutation
    check_invariants: bool = False
    log_level: str = 'WARNING'
    # Upper bound on the number of values to_list() may produce
    max_materialize: int = 1_000_000

    def __post_init__(self):
        assert isinstance(self.check_invariants, bool), f"Expected bool, got {type(self.check_invariants)}"
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}. Expected one of {', '.join(_LOG_LEVELS)}")
        if isinstance(self.max_materialize, bool) or not isinstance(self.max_materialize, int) or self.max_materialize < 0:
            raise ValueError(f"Invalid max_materialize: {self.max_materialize}")

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Builds a Config from BOOLSET_* environment variables. Unset variables
    keep their defaults; malformed values raise ValueError.
    """
    if environ is None:
        environ = os.environ

    config = Config()
    if ENV_CHECK_INVARIANTS in environ:
        config.check_invariants = _parse_bool(ENV_CHECK_INVARIANTS, environ[ENV_CHECK_INVARIANTS])
    if ENV_LOG_LEVEL in environ:
        config.log_level = environ[ENV_LOG_LEVEL].strip().upper()
    if ENV_MAX_MATERIALIZE in environ:
        raw = environ[ENV_MAX_MATERIALIZE].strip().replace('_', '')
        try:
            config.max_materialize = int(raw)
        except ValueError:
            raise ValueError(f"Invalid integer for {ENV_MAX_MATERIALIZE}: {environ[ENV_MAX_MATERIALIZE]!r}")

    # re-run the field checks on the values read from the environment
    config.__post_init__()
    return config


_active_config: Optional[Config] = None


def get_config() -> Config:
    """The process-wide config, loaded from the environment on first use."""
    global _active_config
    if _active_config is None:
        _active_config = load_config()
    return _active_config


def set_config(config: Optional[Config]) -> None:
    """Replaces the process-wide config; None reloads it on next use."""
    global _active_config
    _active_config = config
