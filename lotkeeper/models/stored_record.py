# lotkeeper/models/stored_record.py
"""
Key-value table backing the persistence adapter.
One row per logical key (active vehicles, completed visits); the value is
the JSON document produced by utils/record_codec.
"""

from sqlalchemy import Column, String, DateTime, Text
from lotkeeper.database import Base


class StoredRecord(Base):
    __tablename__ = "stored_records"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True))

    def __repr__(self):
        return f"<StoredRecord {self.key} ({len(self.value or '')} chars)>"
