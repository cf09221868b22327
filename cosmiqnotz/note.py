"""The note record shared by the client, the local store and the API."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

_TIMESTAMP = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)

_REQUIRED_FIELDS = (
    "title",
    "content",
    "created_at",
    "updated_at",
    "created_by",
    "is_shared",
    "shared_with",
    "version",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format a moment as RFC 3339 in UTC with a trailing ``Z``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    base = moment.replace(tzinfo=None, microsecond=0).isoformat()
    micro = moment.microsecond
    if micro == 0:
        fraction = ""
    elif micro % 1000 == 0:
        fraction = f".{micro // 1000:03d}"
    else:
        fraction = f".{micro:06d}"
    return f"{base}{fraction}Z"


def parse_timestamp(text: Any) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime."""
    if not isinstance(text, str):
        raise ValueError(f"invalid timestamp: {text!r}")
    match = _TIMESTAMP.match(text.strip())
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    date_part, time_part, fraction, zone = match.groups()
    fraction = ((fraction or "") + "000000")[:6]
    if zone in ("Z", "z"):
        zone = "+00:00"
    moment = datetime.fromisoformat(f"{date_part}T{time_part}.{fraction}{zone}")
    return moment.astimezone(timezone.utc)


@dataclass(kw_only=True)
class Note:
    """A note with its authorship, sharing state and version counter."""

    id: str | None = None
    title: str
    content: str
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    created_by: str
    is_shared: bool = False
    shared_with: list[str] = field(default_factory=list)
    version: int = 1

    @classmethod
    def create(cls, title: str, content: str, user_id: str) -> "Note":
        """Make a fresh, unsaved note owned by ``user_id``."""
        now = _utcnow()
        return cls(
            id=None,
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
            created_by=user_id,
            is_shared=False,
            shared_with=[],
            version=1,
        )

    def update(self, title: str, content: str) -> None:
        """Replace title and content, touch the timestamp and bump the version."""
        self.title = title
        self.content = content
        self.updated_at = _utcnow()
        self.version += 1

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form; ``id`` is left out when unset."""
        data: dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        data.update(
            title=self.title,
            content=self.content,
            created_at=format_timestamp(self.created_at),
            updated_at=format_timestamp(self.updated_at),
            created_by=self.created_by,
            is_shared=self.is_shared,
            shared_with=list(self.shared_with),
            version=self.version,
        )
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Note":
        """Build a note from its wire form, raising ValueError when it is malformed."""
        if not isinstance(data, Mapping):
            raise ValueError("a note must be an object")
        for name in _REQUIRED_FIELDS:
            if name not in data:
                raise ValueError(f"missing field `{name}`")

        note_id = data.get("id")
        if note_id is not None and not isinstance(note_id, str):
            raise ValueError("`id` must be a string")
        for name in ("title", "content", "created_by"):
            if not isinstance(data[name], str):
                raise ValueError(f"`{name}` must be a string")
        if not isinstance(data["is_shared"], bool):
            raise ValueError("`is_shared` must be a boolean")
        shared_with = data["shared_with"]
        if not isinstance(shared_with, list) or not all(
            isinstance(user, str) for user in shared_with
        ):
            raise ValueError("`shared_with` must be a list of strings")
        version = data["version"]
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            raise ValueError("`version` must be a non-negative integer")

        return cls(
            id=note_id,
            title=data["title"],
            content=data["content"],
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
            created_by=data["created_by"],
            is_shared=data["is_shared"],
            shared_with=list(shared_with),
            version=version,
        )

    def to_json(self) -> str:
        """Serialise the note to compact JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> "Note":
        """Parse a note from JSON text."""
        return cls.from_dict(json.loads(text))