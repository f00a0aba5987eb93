"""
Pydantic schema definitions for API payloads.

Each domain (users, orders, statistics) defines its own models for
request and response bodies.  Field names are snake_case in Python and
camelCase on the wire.
"""
