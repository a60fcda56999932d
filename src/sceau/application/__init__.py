"""
Sceau application layer.
"""
