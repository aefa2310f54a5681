"""
ORM models for the clinic domain: pets, owners and veterinarians.

Importing this package ensures model classes are registered with the Base
metadata for schema creation and runtime usage.
"""

from .clinic import (  # noqa: F401
    Owner,
    Pet,
    Veterinarian,
    pet_veterinarians,
)
