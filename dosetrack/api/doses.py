"""
Endpoints de registros de dosis
"""
from fastapi import APIRouter, Depends, status

from dosetrack.core.dependencies import get_tracking_service
from dosetrack.schemas.dose_log import DoseLogCreate, DoseLogResponse
from dosetrack.services.tracking_service import TrackingService

router = APIRouter()


@router.post("/", response_model=DoseLogResponse, status_code=status.HTTP_201_CREATED)
def log_dose(
        dose_data: DoseLogCreate,
        service: TrackingService = Depends(get_tracking_service)
):
    """
    Registrar una dosis tomada u omitida
    """
    return service.log_dose(
        medication_id=dose_data.medication_id,
        status=dose_data.status,
        logged_at=dose_data.logged_at
    )
