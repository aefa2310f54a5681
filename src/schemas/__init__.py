"""
Public Pydantic schemas used by the query service, FastAPI routes, and tests.

Clinic read models live in `clinic`; standard responses and the error
envelope live in `common`.
"""

from .common import MessageResponse  # noqa: F401
from .clinic import OwnerRead, PetRead, VeterinarianRead  # noqa: F401
