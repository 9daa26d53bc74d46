"""Unit tests for the persistence adapter and its key-value stores."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from lotkeeper.database import create_tables
from lotkeeper.exceptions import PersistenceFailure
from lotkeeper.schemas.vehicle import Vehicle
from lotkeeper.services.kv_store import InMemoryStore, SqlStore
from lotkeeper.services.repository import ParkingRepository
from lotkeeper.services import repository as repository_module

ENTRY = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


def make_vehicles(*plates):
    return [Vehicle(id=uuid4(), plate=p, entry_time=ENTRY) for p in plates]


@pytest.fixture
def sql_store():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    yield SqlStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    engine.dispose()


class TestInMemoryRepository:
    def test_missing_key_is_none(self):
        assert ParkingRepository(InMemoryStore()).load("vehicles", Vehicle) is None

    def test_save_then_load(self):
        repo = ParkingRepository(InMemoryStore())
        vehicles = make_vehicles("A1", "B2")
        repo.save("vehicles", vehicles)
        assert repo.load("vehicles", Vehicle) == vehicles

    def test_saved_text_is_versioned_json(self):
        store = InMemoryStore()
        ParkingRepository(store).save("vehicles", make_vehicles("A1"))
        assert json.loads(store.get("vehicles"))["version"] == 1


class TestSqlStore:
    def test_missing_key(self, sql_store):
        assert sql_store.get("vehicles") is None

    def test_put_overwrites(self, sql_store):
        sql_store.put("vehicles", "[]")
        sql_store.put("vehicles", '{"version": 1, "records": []}')
        assert sql_store.get("vehicles") == '{"version": 1, "records": []}'

    def test_keys_independent(self, sql_store):
        repo = ParkingRepository(sql_store)
        vehicles = make_vehicles("A1")
        repo.save("vehicles", vehicles)
        repo.save("pastVehicles", [])
        assert repo.load("vehicles", Vehicle) == vehicles
        assert repo.load("pastVehicles", Vehicle) == []


class TestStoreFailures:
    def test_write_error_becomes_persistence_failure(self):
        store = MagicMock()
        store.put.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))

        with pytest.raises(PersistenceFailure) as exc:
            ParkingRepository(store).save("vehicles", make_vehicles("A1"))
        assert exc.value.key == "vehicles"
        assert isinstance(exc.value.__cause__, SQLAlchemyError)

    def test_read_error_becomes_persistence_failure(self):
        store = MagicMock()
        store.get.side_effect = OSError("permission denied")

        with pytest.raises(PersistenceFailure):
            ParkingRepository(store).load("vehicles", Vehicle)

    def test_corrupt_value_becomes_persistence_failure(self):
        store = InMemoryStore({"vehicles": "{{{"})
        with pytest.raises(PersistenceFailure):
            ParkingRepository(store).load("vehicles", Vehicle)


class TestDefaultRepository:
    def test_uses_sql_store(self, monkeypatch):
        create = MagicMock()
        monkeypatch.setattr(repository_module, "create_tables", create)

        repo = repository_module.default_repository()

        create.assert_called_once()
        assert isinstance(repo.store, SqlStore)

    def test_falls_back_to_memory_when_database_unusable(self, monkeypatch):
        monkeypatch.setattr(
            repository_module, "create_tables",
            MagicMock(side_effect=OperationalError("CREATE TABLE", {}, Exception("unable to open database file"))),
        )

        repo = repository_module.default_repository()

        assert isinstance(repo.store, InMemoryStore)
        vehicles = make_vehicles("A1")
        repo.save("vehicles", vehicles)
        assert repo.load("vehicles", Vehicle) == vehicles
