"""
Formateo de mensajes de PteroStatus.
Funciones puras: no hacen I/O y siempre producen la misma salida para la misma entrada.
By Killerbite95
"""

from typing import Tuple

from .exceptions import DecodeError, TransportError
from .models import ServerRecord, ServerState

# Vanilla primero, Legacy después
MAP_MESSAGES: Tuple[str, ...] = (
    "Vanilla Online Map - https://map.vanilla.darkwindcraft.com",
    "Legacy Online Map - https://map.legacy.darkwindcraft.com",
)

HELP_MESSAGE = (
    "_I'm a simple Discord bot that interacts with Darkwincraft Minecraft servers_\n"
    "```==== Commands ===\n"
    "!map    - Links to online Minecraft world maps\n"
    "!status - Real time server status```"
)


def format_report(record: ServerRecord, state: ServerState) -> str:
    """
    Genera el bloque de estado de un servidor.

    Args:
        record: Metadatos del servidor
        state: Estado y uso de recursos del mismo servidor

    Returns:
        Mensaje listo para enviar al canal
    """
    usage = state.usage
    return (
        f">>> **{record.name}** \n"
        f"_{record.description}_\n"
        "```\n"
        f"Server: {record.endpoint.address}\n"
        f"Status: {state.current_state}\n"
        "Resources:\n"
        f" * CPU:  {usage.cpu_absolute:.2f}%\n"
        f" * RAM:  {usage.memory_mib}MB/{record.limits.memory}MB\n"
        f" * DISK: {usage.disk_mib}MB/{record.limits.disk}MB\n"
        "```"
    )


def format_error(uuid: str, error: Exception) -> str:
    """Aviso corto para un servidor cuyo estado no se pudo obtener."""
    if isinstance(error, TransportError):
        return f"⚠️ **{uuid}** - server unavailable"
    if isinstance(error, DecodeError):
        return f"⚠️ **{uuid}** - server data could not be read"
    return f"⚠️ **{uuid}** - status unavailable"
