# lotkeeper/services/repository.py
"""
Persistence adapter: save/load ordered record lists under a key.
Every storage or codec problem surfaces as PersistenceFailure so the
controller has a single error to degrade on.
"""

from typing import Optional, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from lotkeeper.database import create_tables
from lotkeeper.exceptions import PersistenceFailure
from lotkeeper.services.kv_store import InMemoryStore, KeyValueStore, SqlStore
from lotkeeper.utils.logger import get_logger
from lotkeeper.utils.record_codec import decode_records, encode_records

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

STORE_ERRORS = (SQLAlchemyError, OSError)


class ParkingRepository:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, key: str, records: Sequence[BaseModel]) -> None:
        try:
            text = encode_records(records)
        except (TypeError, ValueError) as e:
            raise PersistenceFailure(f"Cannot encode records for '{key}': {e}", key=key) from e
        try:
            self.store.put(key, text)
        except STORE_ERRORS as e:
            raise PersistenceFailure(f"Cannot write '{key}': {e}", key=key) from e
        logger.debug(f"[Persist] Saved {len(records)} record(s) under '{key}'")

    def load(self, key: str, record_type: type[T]) -> Optional[list[T]]:
        """Returns None when nothing was stored under key yet."""
        try:
            text = self.store.get(key)
        except STORE_ERRORS as e:
            raise PersistenceFailure(f"Cannot read '{key}': {e}", key=key) from e
        if text is None:
            return None
        return decode_records(text, record_type, key=key)


def default_repository() -> ParkingRepository:
    """SQL-backed repository on settings.DATABASE_URL, or memory if the DB is unusable."""
    try:
        create_tables()
    except SQLAlchemyError as e:
        logger.warning(f"[Persist] Database unavailable, keeping state in memory only: {e}")
        return ParkingRepository(InMemoryStore())
    return ParkingRepository(SqlStore())
