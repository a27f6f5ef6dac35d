"""
Esquemas Pydantic para la ventana de cumplimiento
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date as dt_date
import enum


class DayStatusValue(str, enum.Enum):
    """Estado agregado de un día"""
    TAKEN = "taken"
    MISSED = "missed"
    PENDING = "pending"


class DayStatus(BaseModel):
    """Estado de un día dentro de la ventana"""
    day_index: int = Field(..., ge=0, description="0 = día más antiguo de la ventana")
    date: dt_date
    status: DayStatusValue
    dose_log_id: Optional[int] = Field(None, description="Registro que determina el estado del día")


class AdherenceSummary(BaseModel):
    """Resumen de cumplimiento de una ventana"""
    taken: int = 0
    missed: int = 0
    pending: int = 0
    compliance_rate: float = 0.0  # Porcentaje sobre días registrados
    below_threshold: bool = False


class AdherenceWindow(BaseModel):
    """Ventana de cumplimiento de un medicamento"""
    medication_id: int
    days: int
    start_date: dt_date
    end_date: dt_date
    timezone: str
    statuses: List[DayStatus]
    summary: AdherenceSummary
