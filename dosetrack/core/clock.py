"""
Reloj de la aplicación: instante actual y día calendario en la zona de referencia
"""
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dosetrack.core.exceptions import ValidationError


def as_utc(value: datetime) -> datetime:
    """Normalizar un datetime a UTC (los datetimes sin zona se asumen UTC)"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        raise ValidationError(f"Fecha fuera de rango: {value.isoformat()}")


def load_timezone(name: str) -> ZoneInfo:
    """
    Resolver el nombre de una zona horaria IANA. Un nombre inválido es un
    error de configuración, no de datos de entrada
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Zona horaria desconocida: {name}")


class Clock:
    """
    Reloj base. Las subclases solo implementan now(); el cálculo del día
    calendario siempre se hace en la zona horaria de referencia.
    """

    def __init__(self, tz_name: str = "UTC"):
        self.tz_name = tz_name
        self.tz = load_timezone(tz_name)

    def now(self) -> datetime:
        raise NotImplementedError

    def today(self) -> date:
        """Día calendario actual en la zona de referencia"""
        return self.day_of(self.now())

    def day_of(self, instant: datetime) -> date:
        """Día calendario de un instante en la zona de referencia"""
        return as_utc(instant).astimezone(self.tz).date()

    def checked_instant(self, instant: datetime) -> datetime:
        """
        Instante en UTC cuyo día calendario se puede calcular en la zona de
        referencia; si no, ValidationError
        """
        value = as_utc(instant)
        try:
            self.day_of(value)
        except OverflowError:
            raise ValidationError(f"Fecha fuera de rango: {instant.isoformat()}")
        return value


class SystemClock(Clock):
    """Reloj del sistema"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Reloj fijo, para pruebas"""

    def __init__(self, instant: datetime, tz_name: str = "UTC"):
        super().__init__(tz_name)
        self._instant = as_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime):
        self._instant = as_utc(instant)

    def advance(self, delta: Optional[timedelta] = None, **kwargs):
        self._instant = self._instant + (delta or timedelta(**kwargs))
