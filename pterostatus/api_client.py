"""
Cliente HTTP para la API cliente del panel.
Obtiene metadatos y uso de recursos de cada servidor.
By Killerbite95
"""

import asyncio
import logging
from typing import Optional, Tuple

import aiohttp

from .config import ConfigurationSet
from .exceptions import TransportError
from .models import ServerRecord, ServerState

logger = logging.getLogger("pterostatus.api")


class PanelClient:
    """
    Servicio para consultar el panel.
    Comparte una única sesión aiohttp entre todas las peticiones.
    """

    def __init__(
        self,
        config: ConfigurationSet,
        session: Optional[aiohttp.ClientSession] = None
    ) -> None:
        self.config = config
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            raise RuntimeError("PanelClient no iniciado; llama a start() primero")
        return self._session

    async def start(self) -> None:
        """Abre la sesión HTTP. Debe llamarse dentro del event loop."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True

    async def close(self) -> None:
        """Cierra la sesión HTTP si la creó este cliente."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def fetch(self, url: str, bearer_token: str) -> bytes:
        """
        Realiza un GET autenticado y devuelve el cuerpo crudo.

        Args:
            url: URL completa del recurso
            bearer_token: Token para la cabecera Authorization

        Returns:
            Cuerpo de la respuesta (puede estar vacío)

        Raises:
            TransportError: Si falla la conexión, vence el timeout o el estado no es 200
        """
        headers = {
            "Authorization": f"Bearer {bearer_token}",
            "Accept": "application/json",
        }
        try:
            async with self.session.get(url, headers=headers, timeout=self._timeout) as response:
                if response.status != 200:
                    logger.warning(f"El panel respondió {response.status} para {url}")
                    raise TransportError(url, response.reason, status=response.status)
                return await response.read()
        except asyncio.TimeoutError:
            logger.warning(f"Timeout ({self.config.request_timeout}s) al consultar {url}")
            raise TransportError(url, f"timeout de {self.config.request_timeout}s")
        except aiohttp.ClientError as e:
            logger.warning(f"Error de conexión al consultar {url}: {e!r}")
            raise TransportError(url, str(e)) from e

    async def get_server_info(self, uuid: str) -> Tuple[ServerRecord, ServerState]:
        """
        Obtiene metadatos y estado de un servidor.

        Args:
            uuid: Identificador del servidor en el panel

        Returns:
            Tupla (ServerRecord, ServerState) del mismo servidor

        Raises:
            TransportError: Si alguna de las dos peticiones falla
            DecodeError: Si alguna respuesta no tiene la forma esperada
        """
        server_json = await self.fetch(self.config.server_url(uuid), self.config.api_key)
        state_json = await self.fetch(self.config.resources_url(uuid), self.config.api_key)
        logger.debug(f"Raw servidor {uuid}: {server_json!r}")
        logger.debug(f"Raw recursos {uuid}: {state_json!r}")

        return (
            ServerRecord.from_json(uuid, server_json),
            ServerState.from_json(uuid, state_json),
        )
