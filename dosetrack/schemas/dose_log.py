"""
Esquemas Pydantic para Registros de Dosis
"""
from pydantic import BaseModel, validator, Field
from typing import Optional
from datetime import datetime, date as dt_date

from dosetrack.models.dose_log import DoseStatus


class DoseLogBase(BaseModel):
    """Base para registrar una dosis"""
    status: str = Field(..., description="taken o missed")
    logged_at: Optional[datetime] = Field(
        None,
        description="Instante en que ocurrió la dosis; si falta se usa la hora del servidor"
    )

    @validator('status')
    def normalize_status(cls, v):
        # Valores fuera de taken/missed se rechazan en el store
        return v.strip().lower() if v else v


class DoseLogCreate(DoseLogBase):
    """Esquema para registrar una dosis indicando el medicamento"""
    medication_id: int


class DoseLogResponse(BaseModel):
    """Esquema de respuesta de un registro de dosis"""
    id: int
    medication_id: int
    status: DoseStatus
    logged_at: datetime
    created_at: datetime

    class Config:
        from_attributes = True


class DoseLogHistoryItem(DoseLogResponse):
    """Registro del historial con su vigencia"""
    day: dt_date = Field(..., description="Día calendario (zona de referencia) del registro")
    is_authoritative: bool = Field(..., description="Es el registro vigente de su día")
