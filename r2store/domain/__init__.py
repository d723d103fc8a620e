"""
Domain layer package housing the uniform result types returned by storage operations.
"""

from .results import ClientError, ClientResult

__all__ = ["ClientError", "ClientResult"]
