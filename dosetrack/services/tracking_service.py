"""
Servicio de seguimiento de medicamentos y dosis
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, timedelta

from dosetrack.core.clock import Clock
from dosetrack.core.config import get_settings
from dosetrack.core.exceptions import ValidationError
from dosetrack.models.dose_log import DoseLog
from dosetrack.models.medication import Medication
from dosetrack.schemas.adherence import AdherenceWindow
from dosetrack.schemas.dose_log import DoseLogHistoryItem
from dosetrack.schemas.medication import MedicationResponse, MedicationWithAdherence
from dosetrack.services.adherence import AdherenceAggregator, DEFAULT_WINDOW_DAYS
from dosetrack.services.dose_log_store import DoseLogStore
from dosetrack.services.medication_store import MedicationStore
import logging

logger = logging.getLogger(__name__)


class TrackingService:
    """
    Punto de entrada de las operaciones del cliente. No reintenta ni
    recupera errores: la primera falla se propaga tal cual.
    """

    def __init__(self, db: Session, clock: Clock):
        self.db = db
        self.clock = clock
        self.settings = get_settings()
        self.medications = MedicationStore(db, clock)
        self.dose_logs = DoseLogStore(db, clock)
        self.aggregator = AdherenceAggregator(clock)

    # Lectura

    def list_medications(self) -> List[MedicationWithAdherence]:
        """Todos los medicamentos con su estado de los últimos 7 días"""
        medications = self.medications.list()
        grouped = self.dose_logs.list_grouped(m.id for m in medications)

        return [
            self._with_adherence(medication, grouped[medication.id])
            for medication in medications
        ]

    def get_medication(self, medication_id: int) -> MedicationWithAdherence:
        """Un medicamento con su estado de los últimos 7 días"""
        medication = self.medications.get(medication_id)
        return self._with_adherence(medication, self.dose_logs.list_for(medication_id))

    def get_adherence(self, medication_id: int, days: int = DEFAULT_WINDOW_DAYS) -> AdherenceWindow:
        """Ventana de cumplimiento de tamaño arbitrario"""
        self.medications.get(medication_id)
        entries = self.dose_logs.list_for(medication_id)
        return self.aggregator.build_window(medication_id, entries, days)

    def get_dose_history(self, medication_id: int) -> List[DoseLogHistoryItem]:
        """Historial completo, del más reciente al más antiguo, marcando los vigentes"""
        self.medications.get(medication_id)
        entries = self.dose_logs.list_for(medication_id)
        winner_ids = {entry.id for entry in self.aggregator.winners_by_day(entries).values()}

        history = [
            DoseLogHistoryItem(
                id=entry.id,
                medication_id=entry.medication_id,
                status=entry.status,
                logged_at=entry.logged_at,
                created_at=entry.created_at,
                day=self.clock.day_of(entry.logged_at),
                is_authoritative=entry.id in winner_ids
            )
            for entry in entries
        ]
        history.sort(key=lambda item: (item.logged_at, item.id), reverse=True)
        return history

    # Escritura

    def create_medication(self, name: str, dosage: str, notes: Optional[str] = None) -> Medication:
        """Crear nuevo medicamento"""
        return self.medications.create(name=name, dosage=dosage, notes=notes)

    def log_dose(self, medication_id: int, status, logged_at: Optional[datetime] = None) -> DoseLog:
        """
        Registrar una dosis tomada u omitida.

        Siempre inserta: un segundo registro el mismo día sustituye al primero
        al calcular la ventana.
        """
        if logged_at is None:
            logged_at = self.clock.now()
        else:
            logged_at = self.clock.checked_instant(logged_at)
            self._check_future_skew(logged_at)

        return self.dose_logs.append(medication_id, status, logged_at)

    def _check_future_skew(self, logged_at: datetime):
        tolerance = self.settings.MAX_FUTURE_SKEW_MINUTES
        if tolerance <= 0:
            return

        limit = self.clock.now() + timedelta(minutes=tolerance)
        if logged_at > limit:
            logger.warning(
                f"Dosis rechazada por fecha futura: {logged_at.isoformat()} > {limit.isoformat()}"
            )
            raise ValidationError("La fecha de la dosis no puede estar en el futuro")

    def _with_adherence(self, medication: Medication, entries: List[DoseLog]) -> MedicationWithAdherence:
        base = MedicationResponse.model_validate(medication)
        return MedicationWithAdherence(
            **base.model_dump(),
            last_7_days=self.aggregator.window(entries, DEFAULT_WINDOW_DAYS)
        )
