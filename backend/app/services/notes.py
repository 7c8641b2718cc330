"""Taste, visual and aroma notes.

Clients send either free text or a list of selected tags. Both are normalized
once at the API boundary into a :data:`Note` and stored as JSON.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass

MAX_NOTE_LENGTH = 1000


@dataclass(frozen=True)
class TextNote:
    text: str


@dataclass(frozen=True)
class TagNote:
    tags: frozenset[str]


Note = TextNote | TagNote


def sanitize_text(value: str) -> str:
    return value.replace("<", "").replace(">", "").strip()[:MAX_NOTE_LENGTH]


def normalize_note(raw: str | Iterable[str] | None) -> Note | None:
    if raw is None:
        return None

    if isinstance(raw, str):
        text = sanitize_text(raw)
        return TextNote(text=text) if text else None

    tags = frozenset(tag for tag in (sanitize_text(str(item)) for item in raw) if tag)
    return TagNote(tags=tags) if tags else None


def note_to_payload(note: Note | None) -> str | list[str] | None:
    if note is None:
        return None
    if isinstance(note, TextNote):
        return note.text
    return sorted(note.tags)


def describe_note(note: Note | None) -> str | None:
    if note is None:
        return None
    if isinstance(note, TextNote):
        return note.text
    return ", ".join(sorted(note.tags))


def serialize_note(note: Note | None) -> str | None:
    if note is None:
        return None
    if isinstance(note, TextNote):
        return json.dumps({"kind": "text", "text": note.text})
    return json.dumps({"kind": "tags", "tags": sorted(note.tags)})


def parse_note(raw_payload: str | None) -> Note | None:
    if not raw_payload:
        return None

    try:
        payload = json.loads(raw_payload)
    except json.JSONDecodeError:
        return None

    if not isinstance(payload, dict):
        return None

    kind = payload.get("kind")
    if kind == "text":
        return normalize_note(str(payload.get("text", "")))
    if kind == "tags":
        tags = payload.get("tags")
        if not isinstance(tags, list):
            return None
        return normalize_note([str(tag) for tag in tags])
    return None
