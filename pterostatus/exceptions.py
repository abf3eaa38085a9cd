"""
Excepciones personalizadas para PteroStatus.
By Killerbite95
"""

from typing import Optional


class PteroStatusError(Exception):
    """Excepción base para todos los errores del bot PteroStatus."""

    def __init__(self, message: str = "Error en PteroStatus"):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(PteroStatusError):
    """Se lanza cuando falta o es inválida una variable de entorno."""

    def __init__(self, key: str, reason: Optional[str] = None):
        self.key = key
        self.reason = reason
        message = f"Error de configuración en '{key}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TransportError(PteroStatusError):
    """Se lanza cuando la petición HTTP al panel no obtiene respuesta válida."""

    def __init__(self, url: str, reason: Optional[str] = None, status: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status = status
        message = f"No se pudo consultar {url}"
        if status is not None:
            message += f" (HTTP {status})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DecodeError(PteroStatusError):
    """Se lanza cuando el JSON del panel no tiene la forma esperada."""

    def __init__(self, uuid: str, reason: Optional[str] = None):
        self.uuid = uuid
        self.reason = reason
        message = f"Respuesta inválida para el servidor {uuid}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
