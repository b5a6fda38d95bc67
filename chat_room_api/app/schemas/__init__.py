"""
Pydantic schema definitions for API payloads.

Schemas are separated from the persisted rows to decouple the wire
representation (``from``, ``lastStatus``) from storage column names.
"""
