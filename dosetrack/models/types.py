"""
Tipos de columna compartidos
"""
from datetime import timezone

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

from dosetrack.core.clock import as_utc


class UTCDateTime(TypeDecorator):
    """
    Fecha y hora guardada como UTC sin zona y devuelta con tzinfo=UTC,
    igual en SQLite y MySQL
    """
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return as_utc(value).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)
