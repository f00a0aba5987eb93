"""
Service layer abstraction.

Each service encapsulates business logic for a domain and operates on
an explicit ``DataStore`` handed in by the caller, so API handlers
never touch the underlying collections directly.
"""
