"""Mock statistics backend.

Serves deterministic synthetic data with the same paths and envelope as the
real statistics API, for local development and end-to-end tests.
"""

from .app import create_app
from .routes import API_PREFIX

__all__ = ["API_PREFIX", "create_app"]
