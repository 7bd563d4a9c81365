"""Serialization utilities."""

from dataclasses import asdict
from datetime import datetime
from typing import Any


def _to_json_ready(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _to_json_ready(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_ready(v) for v in value]
    return value


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to dict, converting datetimes (at any depth) to ISO strings."""
    return _to_json_ready(asdict(obj))
