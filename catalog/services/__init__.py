"""
High-level use cases for the catalog API.

Each service receives a sessionmaker and orchestrates repositories to
implement business rules (create a space, resolve a caller, rename a
category). Routers call these services and never touch sessions directly.
"""
