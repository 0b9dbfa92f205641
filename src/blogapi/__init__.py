"""
blogapi

Blog post service: a persistence gateway over a document table, an RPC request
mapper, and a REST surface in front of it.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal to avoid import-time side effects across the codebase.
