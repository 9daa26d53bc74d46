"""Unit tests for the versioned JSON record codec."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from lotkeeper.exceptions import PersistenceFailure
from lotkeeper.schemas.completed_visit import CompletedVisit
from lotkeeper.schemas.vehicle import Vehicle
from lotkeeper.utils.record_codec import (
    LEGACY_EPOCH, decode_records, encode_records, safe_parse_json,
)

ENTRY = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


def make_visit():
    return CompletedVisit(
        id=uuid4(), plate="34ABC123", entry_time=ENTRY,
        exit_time=ENTRY + timedelta(minutes=121), fee=Decimal(70),
    )


class TestEncode:
    def test_envelope_has_version_and_camel_case_fields(self):
        visit = make_visit()
        doc = json.loads(encode_records([visit]))

        assert doc["version"] == 1
        record = doc["records"][0]
        assert set(record) == {"id", "plate", "entryTime", "exitTime", "fee"}
        assert record["id"] == str(visit.id)
        assert record["fee"] == 70.0
        assert record["entryTime"].startswith("2026-10-17T09:00:00")

    def test_empty_list(self):
        assert json.loads(encode_records([])) == {"version": 1, "records": []}

    def test_decode_returns_equal_records(self):
        visit = make_visit()
        assert decode_records(encode_records([visit]), CompletedVisit) == [visit]


class TestDecodeLegacy:
    def test_bare_list_with_reference_date_seconds(self):
        vehicle_id = uuid4()
        raw = json.dumps([{"id": str(vehicle_id), "plate": "06XYZ99", "entryTime": 781000000.5}])

        [vehicle] = decode_records(raw, Vehicle)

        assert vehicle.id == vehicle_id
        assert vehicle.entry_time == LEGACY_EPOCH + timedelta(seconds=781000000.5)

    def test_bare_list_with_iso_timestamps(self):
        raw = json.dumps([{"id": str(uuid4()), "plate": "06XYZ99", "entryTime": "2026-10-17T09:00:00Z"}])
        assert decode_records(raw, Vehicle)[0].entry_time == ENTRY


class TestDecodeErrors:
    def test_invalid_json(self):
        with pytest.raises(PersistenceFailure) as exc:
            decode_records("{not json", Vehicle, key="vehicles")
        assert exc.value.key == "vehicles"

    def test_newer_version_rejected(self):
        with pytest.raises(PersistenceFailure, match="newer format"):
            decode_records(json.dumps({"version": 2, "records": []}), Vehicle)

    def test_invalid_record(self):
        raw = json.dumps({"version": 1, "records": [{"id": "nope", "plate": "", "entryTime": "x"}]})
        with pytest.raises(PersistenceFailure):
            decode_records(raw, Vehicle)

    def test_envelope_must_be_object_or_list(self):
        with pytest.raises(PersistenceFailure):
            decode_records("42", Vehicle)

    def test_safe_parse_json(self):
        assert safe_parse_json(b'{"a": 1}') == {"a": 1}
        assert safe_parse_json(b"\xff\xfe") is None
        assert safe_parse_json("") is None
