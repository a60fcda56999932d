"""
Sceau presentation layer (HTTP API).
"""
