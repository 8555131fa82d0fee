"""Book catalog REST API.

Layered FastAPI service: HTTP routers call the book service, which delegates
to a repository backed by SQLModel tables.
"""

__version__ = "0.1.0"
