"""
Application package initializer.

This package contains the main entrypoint for the chat room backend
and its submodules.  Participants, messages and presence each live in
their own service module and expose a router defined in
``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
