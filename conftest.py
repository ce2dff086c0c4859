import pytest

from boolset.config import set_config


@pytest.fixture
def fresh_config():
    """Drops the process-wide config so it is reloaded from the environment."""
    set_config(None)
    yield
    set_config(None)
