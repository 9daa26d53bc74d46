# lotkeeper/services/kv_store.py
"""
Key-value stores the repository writes through.
InMemoryStore keeps everything in a dict (tests, throwaway sessions).
SqlStore keeps one row per key in the stored_records table.
"""

from datetime import datetime, timezone
from typing import Optional, Protocol

from sqlalchemy.orm import sessionmaker

from lotkeeper.database import SessionLocal
from lotkeeper.models.stored_record import StoredRecord


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str) -> None: ...


class InMemoryStore:
    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value


class SqlStore:
    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as db:
            row = db.query(StoredRecord).filter(StoredRecord.key == key).first()
            return row.value if row else None

    def put(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            row = db.query(StoredRecord).filter(StoredRecord.key == key).first()
            now = datetime.now(timezone.utc)
            if row:
                row.value = value
                row.updated_at = now
            else:
                db.add(StoredRecord(key=key, value=value, updated_at=now))
            db.commit()
