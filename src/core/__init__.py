"""
Core application utilities.

This package provides:
- Application-level settings (separate from DB settings)
- Logging configuration with unit-of-work context
- The query layer error hierarchy
- FastAPI dependency helpers
"""
