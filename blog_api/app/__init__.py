"""
Application package initializer.

The service is split into a handful of small pieces: ``validators``
decide which request bodies are acceptable, ``repositories`` read and
write the SQLite store, and ``api/endpoints`` hold one router per
resource (users, posts) plus the root liveness route.  ``core`` carries
configuration, logging, the store and the error taxonomy.
"""

from .main import app  # noqa: F401
