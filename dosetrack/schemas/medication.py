"""
Esquemas Pydantic para Medicamentos
"""
from pydantic import BaseModel, validator, Field
from typing import Optional, List
from datetime import datetime

from dosetrack.schemas.adherence import DayStatus


class MedicationCreate(BaseModel):
    """Esquema para crear medicamento"""
    name: str = Field(..., max_length=255, description="Nombre del medicamento")
    dosage: str = Field(..., max_length=100, description="Dosis en texto libre (ej: 10mg)")
    notes: Optional[str] = Field(None, max_length=1000, description="Notas (ej: tomar con el desayuno)")

    @validator('name', 'dosage')
    def strip_required(cls, v):
        # Los vacíos se rechazan en el store con ValidationError
        return v.strip() if v else v

    @validator('notes')
    def normalize_notes(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None


class MedicationResponse(BaseModel):
    """Esquema de respuesta básica de medicamento"""
    id: int
    name: str
    dosage: str
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class MedicationWithAdherence(MedicationResponse):
    """Medicamento con el estado de los últimos 7 días"""
    last_7_days: List[DayStatus]
