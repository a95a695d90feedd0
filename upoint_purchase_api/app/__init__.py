"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, errors, the database handle and security
helpers; ``services`` holds the business logic; ``schemas`` the
request/response models; ``api`` the HTTP routes.
"""

from .main import app  # noqa: F401
