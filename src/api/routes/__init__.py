"""
API route modules for the clinic query catalogue.

This package contains read-only subrouters for:
- Pets: listing, filters, ordering, search, range, aggregates and joins
- Owners: listing and pet-count joins
- Veterinarians: listing

Routers are included from src.api.main (under the /api/v1 prefix).
"""
