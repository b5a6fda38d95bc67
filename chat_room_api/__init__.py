"""
Top‑level package for the Chat Room API.

This file makes ``chat_room_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``chat_room_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
