"""
Core utilities shared across the catalog API.

Configuration, logging, password hashing, bearer tokens and rate limiting
live here so that routers/services depend on these primitives instead of
reading the environment or third-party libraries directly.
"""
