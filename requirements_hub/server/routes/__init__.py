"""Routers mounted under ``/api/github``."""
