"""Library catalog web application.

Server-rendered book listing, search and editing on top of FastAPI,
SQLModel and Jinja2.
"""

__version__ = "0.1.0"
