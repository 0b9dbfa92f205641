"""
blogapi.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the blog document table, engine/session setup, and the storage gateway.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Only `db.repositories.blogs.SqlBlogGateway` is used by the service layer; the
# rest of this package is its plumbing.
