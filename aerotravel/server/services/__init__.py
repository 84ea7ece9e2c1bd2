"""Singletons and dependency aliases used by the API routers."""
