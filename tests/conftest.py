"""
Test fixtures and configuration.
"""

import pytest

from sceau.config.settings import reset_settings
from sceau.di.container import set_container


@pytest.fixture(autouse=True)
def reset_globals():
    """Each test starts without cached settings or container."""
    reset_settings()
    set_container(None)
    yield
    reset_settings()
    set_container(None)
