"""
Sceau infrastructure layer.
"""
