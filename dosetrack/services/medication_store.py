"""
Almacén de medicamentos
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional

from dosetrack.core.clock import Clock
from dosetrack.core.exceptions import ValidationError, NotFoundError, StorageError
from dosetrack.models.medication import Medication
import logging

logger = logging.getLogger(__name__)


class MedicationStore:
    """Alta, listado y consulta de medicamentos"""

    def __init__(self, db: Session, clock: Clock):
        self.db = db
        self.clock = clock

    def create(self, name: str, dosage: str, notes: Optional[str] = None) -> Medication:
        """Crear nuevo medicamento"""
        name = (name or "").strip()
        dosage = (dosage or "").strip()
        notes = (notes or "").strip() or None

        if not name:
            raise ValidationError("El nombre del medicamento es requerido")
        if not dosage:
            raise ValidationError("La dosis es requerida")

        db_medication = Medication(
            name=name,
            dosage=dosage,
            notes=notes,
            created_at=self.clock.now()
        )

        try:
            self.db.add(db_medication)
            self.db.commit()
            self.db.refresh(db_medication)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creando medicamento '{name}': {e}")
            raise StorageError("No se pudo guardar el medicamento") from e

        logger.info(f"Medicamento creado: {db_medication.full_name} (ID: {db_medication.id})")
        return db_medication

    def list(self) -> List[Medication]:
        """Todos los medicamentos en orden de creación"""
        try:
            return self.db.query(Medication).order_by(Medication.id).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Error listando medicamentos: {e}")
            raise StorageError("No se pudieron leer los medicamentos") from e

    def get(self, medication_id: int) -> Medication:
        """Obtener medicamento por ID"""
        try:
            medication = self.db.query(Medication).filter(Medication.id == medication_id).first()
        except SQLAlchemyError as e:
            logger.error(f"❌ Error leyendo medicamento {medication_id}: {e}")
            raise StorageError("No se pudo leer el medicamento") from e

        if medication is None:
            raise NotFoundError(f"Medicamento {medication_id} no encontrado")
        return medication

    def exists(self, medication_id: int) -> bool:
        """Verificar si el medicamento existe"""
        try:
            return self.db.query(Medication.id).filter(Medication.id == medication_id).first() is not None
        except SQLAlchemyError as e:
            logger.error(f"❌ Error verificando medicamento {medication_id}: {e}")
            raise StorageError("No se pudo leer el medicamento") from e
