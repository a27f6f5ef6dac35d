"""
Errores del dominio de seguimiento de dosis
"""


class TrackerError(Exception):
    """Error base del núcleo de seguimiento"""
    status_code = 500
    default_detail = "Error interno"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(TrackerError):
    """Dato de entrada inválido o faltante, corregible por el usuario"""
    status_code = 422
    default_detail = "Datos inválidos"


class NotFoundError(TrackerError):
    """Referencia a un registro inexistente"""
    status_code = 404
    default_detail = "Registro no encontrado"


class StorageError(TrackerError):
    """Fallo de la capa de persistencia"""
    status_code = 500
    default_detail = "Error de almacenamiento"

    # Mensaje genérico para el cliente; el detalle interno solo va al log
    public_detail = "Error interno del servidor"
