"""Notification records and their JSON metadata."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


def parse_metadata(value: bytes | bytearray | memoryview | str) -> dict[str, Any] | None:
    """Decode a jsonb metadata column into a mapping (None for JSON null)."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
    elif isinstance(value, str):
        raw = value.encode()
    else:
        raise TypeError(f"cannot decode metadata from {type(value).__name__}")
    decoded = json.loads(raw)
    if decoded is not None and not isinstance(decoded, dict):
        raise ValueError(f"metadata must be a JSON object, got {type(decoded).__name__}")
    return decoded


@dataclass
class Notification:
    id: int = 0
    target: str = ""
    notification_type: str = ""
    starts_on: int = 0
    expires_on: int = 0
    message: str = ""
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "target": self.target,
            "notificationType": self.notification_type,
            "startsOn": self.starts_on,
            "expiresOn": self.expires_on,
            "message": self.message,
            "metadata": self.metadata,
        }