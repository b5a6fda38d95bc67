"""
Version 1 of the API.

This subpackage bundles the participant, message and status endpoints
of the chat room.
"""
