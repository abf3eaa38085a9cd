"""
Modelos de datos para PteroStatus.
Dataclasses inmutables que representan las respuestas de la API cliente del panel.
By Killerbite95
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Union

from .exceptions import DecodeError

BYTES_PER_MIB = 1048576

_MISSING = object()


def _lookup(data: Any, path: Sequence[Union[str, int]], uuid: str) -> Any:
    """
    Recorre una ruta de claves/índices dentro del payload.

    Raises:
        DecodeError: Si algún tramo de la ruta no existe
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list):
                raise DecodeError(uuid, f"'{_dotted(path)}' no es una lista")
            if step >= len(current):
                raise DecodeError(uuid, f"'{_dotted(path)}' está vacío")
            current = current[step]
        else:
            if not isinstance(current, dict):
                raise DecodeError(uuid, f"'{_dotted(path)}' no es un objeto")
            current = current.get(step, _MISSING)
            if current is _MISSING:
                raise DecodeError(uuid, f"falta el campo '{_dotted(path)}'")
    return current


def _dotted(path: Sequence[Union[str, int]]) -> str:
    return ".".join(f"[{p}]" if isinstance(p, int) else p for p in path)


def _int(data: Any, path: Sequence[Union[str, int]], uuid: str) -> int:
    value = _lookup(data, path, uuid)
    # bool es subclase de int, pero no es un valor válido aquí
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(uuid, f"'{_dotted(path)}' debe ser un entero")
    return value


def _float(data: Any, path: Sequence[Union[str, int]], uuid: str) -> float:
    value = _lookup(data, path, uuid)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(uuid, f"'{_dotted(path)}' debe ser numérico")
    return float(value)


def _bool(data: Any, path: Sequence[Union[str, int]], uuid: str) -> bool:
    value = _lookup(data, path, uuid)
    if not isinstance(value, bool):
        raise DecodeError(uuid, f"'{_dotted(path)}' debe ser booleano")
    return value


def _str(data: Any, path: Sequence[Union[str, int]], uuid: str) -> str:
    value = _lookup(data, path, uuid)
    if not isinstance(value, str):
        raise DecodeError(uuid, f"'{_dotted(path)}' debe ser un texto")
    return value


def _optional_str(data: Any, key: str, uuid: str) -> str:
    """Igual que _str, pero una clave ausente o nula devuelve cadena vacía."""
    if not isinstance(data, dict):
        raise DecodeError(uuid, f"se esperaba un objeto con '{key}'")
    if data.get(key) is None:
        return ""
    return _str(data, (key,), uuid)


def parse_json(uuid: str, body: bytes) -> Dict[str, Any]:
    """
    Decodifica el cuerpo de una respuesta del panel.

    Raises:
        DecodeError: Si el cuerpo está vacío, no es JSON o no es un objeto
    """
    if not body:
        raise DecodeError(uuid, "respuesta vacía")
    try:
        payload = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError(uuid, f"JSON mal formado: {e}") from e
    except RecursionError as e:
        raise DecodeError(uuid, "JSON anidado demasiado profundo") from e
    if not isinstance(payload, dict):
        raise DecodeError(uuid, "el documento no es un objeto JSON")
    return payload


@dataclass(frozen=True)
class ResourceLimits:
    """Límites de recursos configurados (MB, peso de IO y % de CPU)."""
    memory: int
    swap: int
    disk: int
    io: int
    cpu: int


@dataclass(frozen=True)
class FeatureLimits:
    """Límites de funcionalidades del servidor."""
    databases: int
    allocations: int
    backups: int


@dataclass(frozen=True)
class Endpoint:
    """Dirección de conexión principal del servidor."""
    hostname: str
    port: int

    @property
    def address(self) -> str:
        """Retorna la dirección en formato host:puerto."""
        return f"{self.hostname}:{self.port}"


@dataclass(frozen=True)
class ResourceUsage:
    """Uso de recursos en tiempo real."""
    memory_bytes: int
    cpu_absolute: float
    disk_bytes: int
    network_rx_bytes: int
    network_tx_bytes: int

    @property
    def memory_mib(self) -> int:
        """Memoria en uso truncada a MiB enteros."""
        return self.memory_bytes // BYTES_PER_MIB

    @property
    def disk_mib(self) -> int:
        """Disco en uso truncado a MiB enteros."""
        return self.disk_bytes // BYTES_PER_MIB


@dataclass(frozen=True)
class ServerRecord:
    """Metadatos de un servidor tal y como los devuelve /api/client/servers/{uuid}."""
    uuid: str
    name: str
    description: str
    node: str
    limits: ResourceLimits
    feature_limits: FeatureLimits
    endpoint: Endpoint

    @classmethod
    def from_payload(cls, uuid: str, payload: Dict[str, Any]) -> "ServerRecord":
        """
        Crea una instancia desde el documento JSON del panel.

        La dirección se toma de la primera allocation; se usa ip_alias y, si no
        tiene alias, la ip de la allocation.

        Raises:
            DecodeError: Si falta algún campo o tiene un tipo incorrecto
        """
        attrs = _lookup(payload, ("attributes",), uuid)

        limits = ResourceLimits(
            memory=_int(attrs, ("limits", "memory"), uuid),
            swap=_int(attrs, ("limits", "swap"), uuid),
            disk=_int(attrs, ("limits", "disk"), uuid),
            io=_int(attrs, ("limits", "io"), uuid),
            cpu=_int(attrs, ("limits", "cpu"), uuid),
        )
        feature_limits = FeatureLimits(
            databases=_int(attrs, ("feature_limits", "databases"), uuid),
            allocations=_int(attrs, ("feature_limits", "allocations"), uuid),
            backups=_int(attrs, ("feature_limits", "backups"), uuid),
        )

        allocation = _lookup(
            attrs, ("relationships", "allocations", "data", 0, "attributes"), uuid
        )
        hostname = _optional_str(allocation, "ip_alias", uuid)
        if not hostname:
            hostname = _str(allocation, ("ip",), uuid)
        port = _int(allocation, ("port",), uuid)
        if not 0 <= port <= 65535:
            raise DecodeError(uuid, f"puerto fuera de rango: {port}")

        return cls(
            uuid=uuid,
            name=_str(attrs, ("name",), uuid),
            description=_optional_str(attrs, "description", uuid),
            node=_optional_str(attrs, "node", uuid),
            limits=limits,
            feature_limits=feature_limits,
            endpoint=Endpoint(hostname=hostname, port=port),
        )

    @classmethod
    def from_json(cls, uuid: str, body: bytes) -> "ServerRecord":
        """Crea una instancia desde el cuerpo crudo de la respuesta."""
        return cls.from_payload(uuid, parse_json(uuid, body))


@dataclass(frozen=True)
class ServerState:
    """Estado y uso de recursos de /api/client/servers/{uuid}/resources."""
    uuid: str
    current_state: str
    is_suspended: bool
    usage: ResourceUsage

    @classmethod
    def from_payload(cls, uuid: str, payload: Dict[str, Any]) -> "ServerState":
        """
        Crea una instancia desde el documento JSON del panel.

        Raises:
            DecodeError: Si falta algún campo o tiene un tipo incorrecto
        """
        attrs = _lookup(payload, ("attributes",), uuid)
        resources = _lookup(attrs, ("resources",), uuid)

        usage = ResourceUsage(
            memory_bytes=_int(resources, ("memory_bytes",), uuid),
            cpu_absolute=_float(resources, ("cpu_absolute",), uuid),
            disk_bytes=_int(resources, ("disk_bytes",), uuid),
            network_rx_bytes=_int(resources, ("network_rx_bytes",), uuid),
            network_tx_bytes=_int(resources, ("network_tx_bytes",), uuid),
        )
        return cls(
            uuid=uuid,
            current_state=_str(attrs, ("current_state",), uuid),
            is_suspended=_bool(attrs, ("is_suspended",), uuid),
            usage=usage,
        )

    @classmethod
    def from_json(cls, uuid: str, body: bytes) -> "ServerState":
        """Crea una instancia desde el cuerpo crudo de la respuesta."""
        return cls.from_payload(uuid, parse_json(uuid, body))
