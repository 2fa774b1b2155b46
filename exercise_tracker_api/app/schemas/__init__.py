"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the SQL used by the services so the wire
format does not follow the table layout.
"""
