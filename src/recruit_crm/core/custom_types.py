import uuid

from sqlalchemy.types import JSON, TypeDecorator, CHAR, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID


class GUID(TypeDecorator):
    """Platform-independent GUID type.
    Uses PostgreSQL's UUID type for PostgreSQL,
    CHAR(36) for others (like SQLite).
    """
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(UUID(as_uuid=True))
        else:
            return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        if dialect.name == 'postgresql':
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            return uuid.UUID(str(value))
        return value


# JSONB on PostgreSQL, plain JSON elsewhere. Keeps the JSON comparator so
# path access like ``column["category"].as_string()`` works on both.
JSONType = JSON().with_variant(JSONB(), "postgresql")


class StringArray(TypeDecorator):
    """Text array.
    Uses PostgreSQL's ARRAY(TEXT) for PostgreSQL,
    a JSON list for others.
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(ARRAY(Text))
        else:
            return dialect.type_descriptor(JSON())

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return [str(item) for item in value]

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return list(value)
