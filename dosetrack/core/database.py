"""
Configuración de base de datos con SQLAlchemy
"""
from sqlalchemy import create_engine, event, text, inspect
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
import logging

from dosetrack.core.config import get_settings
from dosetrack.core.exceptions import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()

settings = get_settings()


def build_engine(database_url: str, echo: bool = False):
    """
    Crear engine según el motor de base de datos
    """
    if database_url.startswith("sqlite"):
        options = {
            "connect_args": {"check_same_thread": False},
            "echo": echo,
        }
        # Una base en memoria debe compartirse entre hilos
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool

        sqlite_engine = create_engine(database_url, **options)

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=3600,  # Reciclar conexiones cada hora
        echo=echo,
    )


def build_sessionmaker(bind):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


try:
    engine = build_engine(settings.database_url, echo=settings.DEBUG)
except Exception as e:
    logger.warning(f"No se pudo crear engine: {e}")
    engine = None

SessionLocal = build_sessionmaker(engine) if engine else None


def get_db():
    """
    Dependency para obtener sesión de base de datos
    """
    if not SessionLocal:
        raise StorageError("Base de datos no configurada")

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Crear todas las tablas si no existen
    """
    bind = bind or engine
    if bind is None:
        raise StorageError("Engine de base de datos no configurado")

    try:
        # Importar todos los modelos para que se registren
        from dosetrack.models import medication, dose_log  # noqa: F401

        Base.metadata.create_all(bind=bind)
        logger.info("✅ Tablas creadas/verificadas exitosamente")

    except Exception as e:
        logger.error(f"❌ Error al crear tablas: {e}")
        raise


def drop_tables(bind=None):
    """
    Eliminar todas las tablas (usar con cuidado)
    """
    bind = bind or engine
    if bind is None:
        raise StorageError("Engine de base de datos no configurado")

    try:
        Base.metadata.drop_all(bind=bind)
        logger.warning("⚠️ Todas las tablas han sido eliminadas")
    except Exception as e:
        logger.error(f"❌ Error al eliminar tablas: {e}")
        raise


def test_connection(bind=None) -> bool:
    """
    Probar conexión a la base de datos
    """
    bind = bind or engine
    if bind is None:
        logger.error("❌ Engine no configurado")
        return False

    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return True
    except Exception as e:
        logger.error(f"❌ Error de conexión a la base de datos: {e}")
        return False


# pytest no debe recolectar test_connection como prueba
test_connection.__test__ = False


def get_db_info(bind=None):
    """
    Obtener información de la base de datos
    """
    bind = bind or engine
    if bind is None:
        return None

    try:
        with bind.connect() as conn:
            version = bind.dialect.server_version_info
            tables = inspect(conn).get_table_names()

        return {
            "dialect": bind.dialect.name,
            "server_version": ".".join(str(part) for part in version) if version else None,
            "database_name": bind.url.database,
            "tables": tables,
        }
    except Exception as e:
        logger.error(f"Error al obtener info de DB: {e}")
        return None
