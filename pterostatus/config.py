"""
Configuración de PteroStatus.
Se lee una sola vez del entorno al arrancar y se pasa explícitamente a cada componente.
By Killerbite95
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .exceptions import ConfigurationError

logger = logging.getLogger("pterostatus.config")

# Variables de entorno obligatorias
ENV_VARS: Tuple[str, ...] = (
    "API_URL",
    "API_KEY",
    "UUID_LIST",
    "DISCORD_TOKEN",
)

DEFAULT_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class ConfigurationSet:
    """Configuración inmutable del proceso."""
    api_url: str
    api_key: str
    server_uuids: Tuple[str, ...]
    bot_token: str
    request_timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def server_url(self, uuid: str) -> str:
        """URL de los metadatos de un servidor."""
        return f"{self.api_url}/api/client/servers/{uuid}"

    def resources_url(self, uuid: str) -> str:
        """URL del uso de recursos de un servidor."""
        return f"{self.server_url(uuid)}/resources"


def load_env_vars(
    names: Sequence[str] = ENV_VARS,
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Lee las variables indicadas del entorno.

    Las que no existen se devuelven como cadena vacía.

    Args:
        names: Nombres de las variables a leer
        environ: Entorno alternativo (por defecto os.environ)

    Returns:
        Dict nombre -> valor
    """
    env = os.environ if environ is None else environ
    return {name: env.get(name, "") for name in names}


def split_uuid_list(raw: str) -> Tuple[str, ...]:
    """Separa UUID_LIST por comas, sin recortar espacios, ignorando segmentos vacíos."""
    return tuple(part for part in raw.split(",") if part)


def load_config(environ: Optional[Mapping[str, str]] = None) -> ConfigurationSet:
    """
    Construye la configuración validada del proceso.

    Raises:
        ConfigurationError: Si falta una variable obligatoria o un valor es inválido
    """
    env = os.environ if environ is None else environ
    values = load_env_vars(ENV_VARS, env)

    for key in ("API_URL", "API_KEY", "DISCORD_TOKEN"):
        if not values[key]:
            raise ConfigurationError(key, "variable de entorno no definida o vacía")
    if "UUID_LIST" not in env:
        raise ConfigurationError("UUID_LIST", "variable de entorno no definida")

    raw_timeout = env.get("API_TIMEOUT", "")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError("API_TIMEOUT", f"'{raw_timeout}' no es un número")
        if not math.isfinite(timeout) or timeout <= 0:
            raise ConfigurationError("API_TIMEOUT", "debe ser un número finito mayor que 0")
    else:
        timeout = DEFAULT_TIMEOUT

    log_level = (env.get("LOG_LEVEL", "") or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError("LOG_LEVEL", f"nivel desconocido '{log_level}'")

    uuids = split_uuid_list(values["UUID_LIST"])
    if not uuids:
        logger.warning("UUID_LIST está vacía; !status no responderá nada")

    return ConfigurationSet(
        api_url=values["API_URL"].rstrip("/"),
        api_key=values["API_KEY"],
        server_uuids=uuids,
        bot_token=values["DISCORD_TOKEN"],
        request_timeout=timeout,
        log_level=log_level,
    )
