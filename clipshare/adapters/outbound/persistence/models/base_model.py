# clipshare/adapters/outbound/persistence/models/base_model.py

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

# Parent class of every ORM model, holds the metadata used by create_all and alembic
Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime column stored in UTC.

    Values are converted to UTC before binding and always come back
    aware, including on SQLite where the offset is not persisted.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
