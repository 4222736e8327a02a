"""
Web application package for the chess opponent.

Provides a FastAPI REST API for asking the computer for a move and for
playing rooms against it.
"""
