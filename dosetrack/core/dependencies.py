"""
Dependencias globales de la aplicación
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from dosetrack.core.clock import Clock, SystemClock
from dosetrack.core.config import get_settings
from dosetrack.core.database import get_db
from dosetrack.services.tracking_service import TrackingService


def get_clock() -> Clock:
    """
    Reloj del sistema en la zona horaria de referencia
    """
    return SystemClock(get_settings().DEFAULT_TIMEZONE)


def get_tracking_service(
        db: Session = Depends(get_db),
        clock: Clock = Depends(get_clock)
) -> TrackingService:
    """
    Servicio de seguimiento con la sesión de la request
    """
    return TrackingService(db, clock)
