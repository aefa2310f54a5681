"""
Error hierarchy for the clinic query layer.
"""

from typing import Any, Dict, Optional


class ClinicQueryError(Exception):
    """Base exception for query layer errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ValidationError(ClinicQueryError):
    """A required query parameter is missing."""

    def __init__(self, parameter: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"Parameter '{parameter}' is required", context)
        self.parameter = parameter


class NoResultError(ClinicQueryError):
    """A scalar query produced no value."""

    def __init__(self, query: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"Query '{query}' returned no result", context)
        self.query = query


class AmbiguousResultError(ClinicQueryError):
    """A lookup expected to identify one row matched several."""

    def __init__(self, message: str, matches: int, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.matches = matches


class GatewayError(ClinicQueryError):
    """Failure raised by the persistence layer while running a query."""

    def __init__(self, query: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"Query '{query}' failed in the persistence layer", context)
        self.query = query
