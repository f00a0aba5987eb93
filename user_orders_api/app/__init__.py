"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, error types and the in‑memory store;
``schemas`` holds the pydantic payload models; ``services`` holds the
query, validation and aggregation logic; ``api`` exposes versioned
routers built on top of the services.
"""

from .main import app, create_app  # noqa: F401
