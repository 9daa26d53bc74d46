# lotkeeper/utils/record_codec.py
"""
Encodes/decodes persisted record lists as versioned JSON text.

Current layout:  {"version": 1, "records": [{...}, ...]}
Legacy layout:   a bare JSON list with no version (read as version 0).
Version 0 stores timestamps as seconds since 2001-01-01 UTC; they are
converted to absolute instants on load.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from lotkeeper.exceptions import PersistenceFailure
from lotkeeper.schemas.stored_records import CURRENT_FORMAT_VERSION, RecordEnvelope

T = TypeVar("T", bound=BaseModel)

LEGACY_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)
LEGACY_TIME_FIELDS = ("entryTime", "exitTime")


def safe_parse_json(raw: Union[str, bytes]) -> Optional[Any]:
    """Parse JSON text or bytes safely. Returns None on error."""
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def encode_records(records: Sequence[BaseModel]) -> str:
    """Serialize records with camelCase field names, indented for diffing."""
    envelope = RecordEnvelope(
        version=CURRENT_FORMAT_VERSION,
        records=[r.model_dump(mode="json", by_alias=True) for r in records],
    )
    return json.dumps(envelope.model_dump(), indent=2, ensure_ascii=False)


def decode_records(raw: Union[str, bytes], record_type: type[T], key: str = "") -> list[T]:
    """Parse stored text into validated records. Raises PersistenceFailure."""
    data = safe_parse_json(raw)
    if data is None:
        raise PersistenceFailure(f"Stored value for '{key}' is not valid JSON", key=key)

    if isinstance(data, list):
        data = {"version": 0, "records": data}

    try:
        envelope = RecordEnvelope.model_validate(data)
    except ValidationError as e:
        raise PersistenceFailure(f"Malformed record envelope for '{key}': {e}", key=key) from e

    if envelope.version > CURRENT_FORMAT_VERSION:
        raise PersistenceFailure(
            f"'{key}' was written by a newer format (v{envelope.version}, "
            f"supported up to v{CURRENT_FORMAT_VERSION})",
            key=key,
        )

    records = envelope.records
    if envelope.version == 0:
        records = [_migrate_v0(r) for r in records]

    try:
        return TypeAdapter(list[record_type]).validate_python(records)
    except ValidationError as e:
        raise PersistenceFailure(
            f"{e.error_count()} invalid field(s) in records for '{key}'", key=key
        ) from e


def _migrate_v0(record: dict[str, Any]) -> dict[str, Any]:
    migrated = dict(record)
    for field in LEGACY_TIME_FIELDS:
        value = migrated.get(field)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            migrated[field] = LEGACY_EPOCH + timedelta(seconds=value)
    return migrated
