"""
Sceau - wallet sign-in challenges and sealed session tokens.
"""

__version__ = "0.1.0"
