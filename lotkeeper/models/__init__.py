# lotkeeper — Database Models
# Import all models here for SQLAlchemy discovery

from lotkeeper.models.stored_record import StoredRecord  # noqa
