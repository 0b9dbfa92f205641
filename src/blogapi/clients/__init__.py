"""
blogapi.clients

Client package.

Responsibilities:
- Provide an HTTP client for the blog service's REST surface.
"""

from blogapi.clients.http import BlogApiClient

__all__ = ["BlogApiClient"]
