"""
blogapi.domain

Domain package.

Responsibilities:
- Blog record type and tri-state outcome enums.
- Domain error taxonomy shared by the gateway and the request mapper.
- Identifier codec and the persistence gateway port.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here imports SQLAlchemy, FastAPI or pydantic; storage and transport depend
# on the domain, never the other way round.
