"""
Archivo principal de la aplicación FastAPI - DoseTrack
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dosetrack.core.config import get_settings
from dosetrack.core.database import create_tables, test_connection, get_db_info
from dosetrack.core.exceptions import TrackerError, StorageError
from dosetrack.api import api_router
import logging

settings = get_settings()

# Configurar logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestión del ciclo de vida de la aplicación"""
    # Startup
    logger.info("🚀 Iniciando DoseTrack API...")
    logger.info(f"🌍 Ambiente: {settings.ENVIRONMENT}")
    logger.info(f"🕒 Zona horaria de referencia: {settings.DEFAULT_TIMEZONE}")

    if test_connection():
        logger.info("✅ Conexión a la base de datos exitosa")

        db_info = get_db_info()
        if db_info:
            logger.info(f"📊 {db_info['dialect']} {db_info['server_version']} - DB: {db_info['database_name']}")

        try:
            create_tables()
            logger.info("✅ Esquema de base de datos verificado")
        except Exception as e:
            logger.error(f"❌ Error al verificar esquema: {e}")
    else:
        logger.error("❌ Error de conexión a la base de datos")
        logger.warning("⚠️ La aplicación continuará pero sin base de datos")

    logger.info("🎯 DoseTrack API lista para recibir requests")
    yield

    # Shutdown
    logger.info("🛑 Cerrando DoseTrack API...")


def create_application() -> FastAPI:
    """Factory function para crear la aplicación FastAPI"""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
## DoseTrack API

API REST para el seguimiento de cumplimiento de medicamentos.

### Características principales:
- 💊 Registro de medicamentos
- ✅ Registro de dosis tomadas u omitidas
- 📊 Ventana de cumplimiento de los últimos días
        """,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    setup_middlewares(app)
    setup_exception_handlers(app)
    setup_routes(app)

    return app


def setup_middlewares(app: FastAPI):
    """Configurar middlewares de la aplicación"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"🌐 Orígenes permitidos: {settings.CORS_ORIGINS}")


def setup_exception_handlers(app: FastAPI):
    """Traducir errores del dominio a respuestas HTTP"""

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"❌ Error de almacenamiento en {request.method} {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": StorageError.public_detail}
        )

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )


def setup_routes(app: FastAPI):
    """Configurar rutas de la aplicación"""

    @app.get("/")
    async def root():
        return {
            "message": "💊 DoseTrack API",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "documentation": "/docs",
            "health": "/health",
            "api": "/api"
        }

    @app.get("/health")
    def health_check():
        """Health check completo de la aplicación"""
        db_status = "connected" if test_connection() else "disconnected"

        health_status = {
            "status": "healthy" if db_status == "connected" else "degraded",
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "database": {
                "status": db_status
            },
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        if settings.DEBUG:
            db_info = get_db_info()
            if db_info:
                health_status["database"].update(db_info)

        return health_status

    app.include_router(
        api_router,
        prefix="/api"
    )

    logger.info("🛣️ Rutas configuradas correctamente")


# Crear la aplicación
app = create_application()


# Solo para desarrollo con uvicorn run
if __name__ == "__main__":
    import uvicorn

    logger.info("🚀 Iniciando servidor de desarrollo...")
    logger.info(f"🌐 URL: http://{settings.HOST}:{settings.PORT}")
    logger.info(f"📚 Docs: http://{settings.HOST}:{settings.PORT}/docs")

    uvicorn.run(
        "dosetrack.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=settings.DEBUG,
    )
