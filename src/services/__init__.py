"""
Service layer: query orchestration over the repositories.
"""

from .clinic import ClinicQueryService  # noqa: F401
