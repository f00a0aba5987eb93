"""
Version 1 of the API.

This subpackage bundles the user, order, statistics and maintenance
endpoints.  Breaking changes belong in a new version subpackage.
"""
