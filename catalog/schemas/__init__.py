"""
Request/response models exchanged over the HTTP API.

Field names are snake_case in Python and camelCase on the wire.
"""
