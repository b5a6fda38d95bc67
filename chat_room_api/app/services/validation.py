"""
Validation of incoming payloads.

Every validator checks its input against a fixed schema before any
store access and reports *all* violated constraints at once through
``ValidationError``.  On success the parsed value is returned.
"""

import math
from typing import Any, List, Optional, Type

import pydantic
from pydantic import BaseModel

from ..core.errors import ValidationError
from ..schemas.message import MessageCreate
from ..schemas.participant import ParticipantCreate


SQLITE_MAX_INTEGER = 2 ** 63 - 1


def _describe(exc: pydantic.ValidationError) -> List[str]:
    """Turn pydantic errors into human readable messages."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        messages.append(f'"{field}" {error["msg"].lower()}')
    return messages


def _validate(schema: Type[BaseModel], payload: Any) -> BaseModel:
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def validate_participant(payload: Any) -> ParticipantCreate:
    """Validate a registration payload: a non-empty string ``name``."""
    return _validate(ParticipantCreate, payload)


def validate_message(payload: Any) -> MessageCreate:
    """Validate a message payload.

    ``to`` and ``text`` must be non-empty strings and ``type`` one of
    ``message`` or ``private_message``.
    """
    return _validate(MessageCreate, payload)


def validate_limit(raw: Any) -> Optional[int]:
    """Validate the optional ``limit`` query parameter.

    ``None`` (or an empty string) means unbounded.  Anything else must
    parse as a finite number greater than or equal to 1; fractional
    values are truncated and values beyond the largest SQLite integer
    are clamped to it.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValidationError(['"limit" must be a number'])
    try:
        value = float(raw)
    except OverflowError:
        # An integer beyond float range.
        if raw > 0:
            return SQLITE_MAX_INTEGER
        raise ValidationError(['"limit" must be greater than or equal to 1'])
    except (TypeError, ValueError):
        raise ValidationError(['"limit" must be a number'])
    if not math.isfinite(value):
        raise ValidationError(['"limit" must be a number'])
    if value < 1:
        raise ValidationError(['"limit" must be greater than or equal to 1'])
    return min(int(value), SQLITE_MAX_INTEGER)
