"""
FastAPI routers grouped by resource (auth, spaces, taxonomies, users).

Routers translate HTTP to service calls only; errors raised by services are
rendered by the exception handler registered in catalog.app.
"""
