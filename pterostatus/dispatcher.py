"""
Despachador de comandos de PteroStatus.
Convierte el texto de un mensaje en la lista de respuestas a enviar.
By Killerbite95
"""

import logging
from typing import AsyncIterator, Callable, Dict, List, Optional

from .api_client import PanelClient
from .config import ConfigurationSet
from .exceptions import DecodeError, TransportError
from .formatting import HELP_MESSAGE, MAP_MESSAGES, format_error, format_report

logger = logging.getLogger("pterostatus.dispatcher")

STATUS_COMMAND = "!status"
MAP_COMMAND = "!map"
HELP_COMMAND = "!help"


class CommandDispatcher:
    """
    Despacho sin estado: cada invocación es independiente.
    Solo comparte la configuración (inmutable) y el cliente del panel.
    """

    def __init__(self, config: ConfigurationSet, client: PanelClient) -> None:
        self.config = config
        self.client = client
        self._handlers: Dict[str, Callable[[], AsyncIterator[str]]] = {
            STATUS_COMMAND: self._status_replies,
            MAP_COMMAND: self._map_replies,
            HELP_COMMAND: self._help_replies,
        }

    async def iter_replies(
        self,
        content: str,
        author_id: Optional[int],
        self_id: Optional[int]
    ) -> AsyncIterator[str]:
        """
        Genera las respuestas para un mensaje entrante, en orden.

        Args:
            content: Texto exacto del mensaje (sin recortar)
            author_id: ID del autor del mensaje
            self_id: ID del propio bot

        Yields:
            Cada mensaje de respuesta
        """
        # Ignorar mensajes del propio bot
        if author_id == self_id:
            return

        handler = self._handlers.get(content)
        if handler is None:
            return

        logger.info(f"{content} - {author_id}")
        async for reply in handler():
            yield reply

    async def dispatch(
        self,
        content: str,
        author_id: Optional[int],
        self_id: Optional[int]
    ) -> List[str]:
        """Igual que iter_replies, pero devuelve todas las respuestas juntas."""
        return [reply async for reply in self.iter_replies(content, author_id, self_id)]

    async def _status_replies(self) -> AsyncIterator[str]:
        """Un informe por servidor; un fallo no detiene al resto."""
        for uuid in self.config.server_uuids:
            try:
                record, state = await self.client.get_server_info(uuid)
            except (TransportError, DecodeError) as e:
                logger.warning(f"No se pudo obtener el estado de {uuid}: {e}")
                yield format_error(uuid, e)
                continue
            except Exception as e:
                logger.exception(f"Error inesperado consultando {uuid}: {e!r}")
                yield format_error(uuid, e)
                continue
            yield format_report(record, state)

    async def _map_replies(self) -> AsyncIterator[str]:
        for message in MAP_MESSAGES:
            yield message

    async def _help_replies(self) -> AsyncIterator[str]:
        yield HELP_MESSAGE

