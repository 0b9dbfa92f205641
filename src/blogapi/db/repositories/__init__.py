"""
blogapi.db.repositories

Repository package.

Responsibilities:
- Group data-access implementations for the persistence layer.
"""

# Package marker; implementations are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories translate driver exceptions into domain errors and stop there;
# status-code decisions belong to services.
