from app.services.notes import (
    MAX_NOTE_LENGTH,
    TagNote,
    TextNote,
    describe_note,
    normalize_note,
    parse_note,
    serialize_note,
)


def test_text_note_is_sanitized() -> None:
    note = normalize_note("  <b>Vinegary</b> and bright  ")

    assert note == TextNote(text="bVinegary/b and bright")


def test_text_note_is_truncated() -> None:
    note = normalize_note("x" * (MAX_NOTE_LENGTH + 50))

    assert isinstance(note, TextNote)
    assert len(note.text) == MAX_NOTE_LENGTH


def test_blank_notes_normalize_to_none() -> None:
    assert normalize_note(None) is None
    assert normalize_note("   ") is None
    assert normalize_note(["", "  "]) is None


def test_tag_note_drops_duplicates() -> None:
    note = normalize_note(["Fruity", "Yeasty", "Fruity"])

    assert note == TagNote(tags=frozenset({"Fruity", "Yeasty"}))
    assert describe_note(note) == "Fruity, Yeasty"


def test_serialized_note_parses_back() -> None:
    note = normalize_note(["Cloudy", "Film forming"])

    assert parse_note(serialize_note(note)) == note


def test_parse_note_rejects_malformed_payloads() -> None:
    assert parse_note(None) is None
    assert parse_note("not json") is None
    assert parse_note('["Fruity"]') is None
    assert parse_note('{"kind": "tags", "tags": "Fruity"}') is None
    assert parse_note('{"kind": "audio"}') is None
