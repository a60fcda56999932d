"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
"""

from sceau.application.session_lifecycle import SessionLifecycle
from sceau.config.settings import Settings
from sceau.di.container import get_container


def get_app_settings() -> Settings:
    """Get settings the container was built from."""
    return get_container().settings


def get_session_lifecycle() -> SessionLifecycle:
    """Get SessionLifecycle controller dependency."""
    return get_container().session_lifecycle
