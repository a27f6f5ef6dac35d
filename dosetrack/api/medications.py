"""
Endpoints de medicamentos
"""
from fastapi import APIRouter, Depends, status, Query
from typing import List

from dosetrack.core.dependencies import get_tracking_service
from dosetrack.schemas.adherence import AdherenceWindow
from dosetrack.schemas.dose_log import DoseLogBase, DoseLogResponse, DoseLogHistoryItem
from dosetrack.schemas.medication import (
    MedicationCreate,
    MedicationResponse,
    MedicationWithAdherence
)
from dosetrack.services.adherence import DEFAULT_WINDOW_DAYS
from dosetrack.services.tracking_service import TrackingService

router = APIRouter()


@router.get("/", response_model=List[MedicationWithAdherence])
def list_medications(
        service: TrackingService = Depends(get_tracking_service)
):
    """
    Listar medicamentos con el estado de los últimos 7 días
    """
    return service.list_medications()


@router.post("/", response_model=MedicationResponse, status_code=status.HTTP_201_CREATED)
def create_medication(
        medication_data: MedicationCreate,
        service: TrackingService = Depends(get_tracking_service)
):
    """
    Crear nuevo medicamento
    """
    return service.create_medication(
        name=medication_data.name,
        dosage=medication_data.dosage,
        notes=medication_data.notes
    )


@router.get("/{medication_id}", response_model=MedicationWithAdherence)
def get_medication(
        medication_id: int,
        service: TrackingService = Depends(get_tracking_service)
):
    """
    Obtener un medicamento con su estado de los últimos 7 días
    """
    return service.get_medication(medication_id)


@router.get("/{medication_id}/adherence", response_model=AdherenceWindow)
def get_medication_adherence(
        medication_id: int,
        days: int = Query(DEFAULT_WINDOW_DAYS, description="Tamaño de la ventana en días"),
        service: TrackingService = Depends(get_tracking_service)
):
    """
    Ventana de cumplimiento con resumen
    """
    return service.get_adherence(medication_id, days)


@router.get("/{medication_id}/doses", response_model=List[DoseLogHistoryItem])
def get_dose_history(
        medication_id: int,
        service: TrackingService = Depends(get_tracking_service)
):
    """
    Historial completo de registros, incluidos los sustituidos
    """
    return service.get_dose_history(medication_id)


@router.post("/{medication_id}/doses", response_model=DoseLogResponse, status_code=status.HTTP_201_CREATED)
def log_medication_dose(
        medication_id: int,
        dose_data: DoseLogBase,
        service: TrackingService = Depends(get_tracking_service)
):
    """
    Registrar una dosis del medicamento indicado en la ruta
    """
    return service.log_dose(
        medication_id=medication_id,
        status=dose_data.status,
        logged_at=dose_data.logged_at
    )
