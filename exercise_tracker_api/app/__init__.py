"""
Application package of the Exercise Tracker API.

``core`` holds configuration, logging, the database handle and the
error taxonomy; ``schemas`` the pydantic request/response models;
``services`` the user and exercise stores and the date helpers; and
``api`` the routes.  ``main.create_app`` wires them together.
"""

from .main import app, create_app  # noqa: F401
