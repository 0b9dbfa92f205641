"""
blogapi.api

HTTP surface for the blog service.

Responsibilities:
- FastAPI app factory and router modules.
- Map REST routes 1:1 onto the blog RPCs and render RPC status as HTTP.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers stay thin: decode the HTTP request, call BlogService, render the result.
