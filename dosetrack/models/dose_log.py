"""
Modelo de Registro de Dosis
"""
from sqlalchemy import Column, Integer, ForeignKey, Enum, Index
import enum

from dosetrack.core.database import Base
from dosetrack.models.types import UTCDateTime


class DoseStatus(str, enum.Enum):
    """Estados de una dosis registrada"""
    TAKEN = "taken"
    MISSED = "missed"


class DoseLog(Base):
    """
    Registro de Dosis. Solo se insertan filas nuevas: un registro posterior
    para el mismo medicamento y día sustituye al anterior en la lectura.
    """
    __tablename__ = "dose_logs"
    __table_args__ = (
        Index("ix_dose_logs_medication_logged_at", "medication_id", "logged_at"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    medication_id = Column(Integer, ForeignKey("medications.id"), nullable=False)
    status = Column(
        Enum(DoseStatus, name="dosestatus", values_callable=lambda e: [m.value for m in e]),
        nullable=False
    )
    logged_at = Column(UTCDateTime, nullable=False)  # instante declarado por el cliente
    created_at = Column(UTCDateTime, nullable=False)  # instante de recepción

    def __repr__(self):
        return (
            f"<DoseLog(id={self.id}, medication_id={self.medication_id}, "
            f"status={self.status.value if self.status else None}, logged_at={self.logged_at})>"
        )

    @property
    def sort_key(self):
        """Orden de sustitución: primero logged_at, luego id"""
        return self.logged_at, self.id or 0
