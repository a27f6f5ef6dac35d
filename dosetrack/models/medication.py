"""
Modelo de Medicamento
"""
from sqlalchemy import Column, Integer, String, Text

from dosetrack.core.database import Base
from dosetrack.models.types import UTCDateTime


class Medication(Base):
    """Modelo de Medicamento"""
    __tablename__ = "medications"
    # AUTOINCREMENT en SQLite: un id nunca se reutiliza
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Información básica
    name = Column(String(255), nullable=False, index=True)
    dosage = Column(String(100), nullable=False)  # texto libre, ej: "10mg"
    notes = Column(Text, nullable=True)

    # Metadatos
    created_at = Column(UTCDateTime, nullable=False)

    def __repr__(self):
        return f"<Medication(id={self.id}, name='{self.name}', dosage='{self.dosage}')>"

    @property
    def full_name(self) -> str:
        """Nombre completo del medicamento"""
        return f"{self.name} {self.dosage}"
