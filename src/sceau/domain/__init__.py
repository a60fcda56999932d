"""
Sceau domain layer.
"""
