"""
Almacén de registros de dosis (solo inserción)
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, Iterable, List, Optional
from datetime import datetime

from dosetrack.core.clock import Clock
from dosetrack.core.exceptions import ValidationError, NotFoundError, StorageError
from dosetrack.models.dose_log import DoseLog, DoseStatus
from dosetrack.services.medication_store import MedicationStore
import logging

logger = logging.getLogger(__name__)


def parse_status(status) -> DoseStatus:
    """Convertir el estado recibido a DoseStatus"""
    if isinstance(status, DoseStatus):
        return status
    value = str(status or "").strip().lower()
    try:
        return DoseStatus(value)
    except ValueError:
        raise ValidationError(f"Estado de dosis inválido: '{status}'. Use taken o missed")


class DoseLogStore:
    """
    Registro puro de dosis. Cada llamada a append inserta una fila nueva;
    la regla de un estado por día se resuelve al leer.
    """

    def __init__(self, db: Session, clock: Clock):
        self.db = db
        self.clock = clock
        self.medications = MedicationStore(db, clock)

    def append(self, medication_id: int, status, logged_at: Optional[datetime]) -> DoseLog:
        """Registrar una dosis"""
        dose_status = parse_status(status)
        if logged_at is None:
            raise ValidationError("La fecha de la dosis es requerida")

        logged_at = self.clock.checked_instant(logged_at)

        if not self.medications.exists(medication_id):
            raise NotFoundError(f"Medicamento {medication_id} no encontrado")

        db_entry = DoseLog(
            medication_id=medication_id,
            status=dose_status,
            logged_at=logged_at,
            created_at=self.clock.now()
        )

        try:
            self.db.add(db_entry)
            self.db.commit()
            self.db.refresh(db_entry)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error registrando dosis para medicamento {medication_id}: {e}")
            raise StorageError("No se pudo guardar el registro de dosis") from e

        logger.info(
            f"Dosis registrada: medicamento {medication_id} {dose_status.value} "
            f"en {db_entry.logged_at.isoformat()} (ID: {db_entry.id})"
        )
        return db_entry

    def list_for(self, medication_id: int) -> List[DoseLog]:
        """Todos los registros de un medicamento"""
        try:
            return self.db.query(DoseLog).filter(
                DoseLog.medication_id == medication_id
            ).order_by(DoseLog.logged_at, DoseLog.id).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Error leyendo dosis del medicamento {medication_id}: {e}")
            raise StorageError("No se pudieron leer los registros de dosis") from e

    def list_grouped(self, medication_ids: Iterable[int]) -> Dict[int, List[DoseLog]]:
        """Registros de varios medicamentos en una sola consulta"""
        grouped = {medication_id: [] for medication_id in medication_ids}
        if not grouped:
            return grouped

        try:
            entries = self.db.query(DoseLog).filter(
                DoseLog.medication_id.in_(list(grouped))
            ).order_by(DoseLog.logged_at, DoseLog.id).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Error leyendo registros de dosis: {e}")
            raise StorageError("No se pudieron leer los registros de dosis") from e

        for entry in entries:
            grouped[entry.medication_id].append(entry)
        return grouped
