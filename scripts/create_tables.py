#!/usr/bin/env python3
"""
Script para crear las tablas de la base de datos de DoseTrack
"""
import sys
import os

# Agregar el directorio raíz al path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dosetrack.core.database import create_tables, test_connection, get_db_info
from dosetrack.core.config import get_settings
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

EXPECTED_TABLES = ['medications', 'dose_logs']


def main():
    """Función principal"""
    settings = get_settings()

    logger.info("🚀 Iniciando creación de tablas para DoseTrack")
    logger.info(f"📊 Entorno: {settings.ENVIRONMENT}")
    logger.info(f"🗄️ Base de datos: {settings.database_url}")

    logger.info("🔗 Probando conexión...")
    if not test_connection():
        logger.error("❌ No se pudo conectar a la base de datos")
        return False

    try:
        logger.info("🔨 Creando tablas...")
        create_tables()
        logger.info("✅ ¡Tablas creadas exitosamente!")

        verify_tables()

        return True

    except Exception as e:
        logger.error(f"❌ Error al crear tablas: {e}")
        return False


def verify_tables():
    """Verificar que las tablas se crearon correctamente"""
    db_info = get_db_info() or {}
    tables = db_info.get("tables", [])

    logger.info("📋 Verificando tablas creadas:")
    for table in EXPECTED_TABLES:
        if table in tables:
            logger.info(f"   ✅ {table}")
        else:
            logger.warning(f"   ⚠️ {table} - No encontrada")

    logger.info(f"📊 Total de tablas: {len(tables)}")


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
