"""
API routes.
"""

from sceau.presentation.api.routes import auth, health

__all__ = ["auth", "health"]
