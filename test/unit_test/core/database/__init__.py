"""Unit tests for the database layer in aerotravel/core/database.

Repository tests run against mocks or in-memory SQLite so they need no
external database service.
"""
