"""
blogapi.services

Service-layer package.

Responsibilities:
- Map protocol requests onto the persistence gateway and outcomes onto status codes.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on the BlogGateway protocol only, so tests can run them against
# an in-memory store.
