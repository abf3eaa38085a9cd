"""
PteroStatus - Bot de Discord
Responde a !status, !map y !help con el estado de los servidores del panel.
By Killerbite95

Versión: 1.0.0
Compatible con: discord.py 2.3+
"""

import asyncio
import logging
import signal
import sys
from typing import Optional, Set

import discord

from .api_client import PanelClient
from .config import ConfigurationSet, load_config
from .dispatcher import CommandDispatcher
from .exceptions import ConfigurationError

# Configuración de logging
logger = logging.getLogger("pterostatus")


class StatusBot(discord.Client):
    """Cliente de Discord que reenvía los comandos al despachador. By Killerbite95"""

    __author__ = "Killerbite95"
    __version__ = "1.0.0"

    def __init__(self, config: ConfigurationSet, panel: Optional[PanelClient] = None) -> None:
        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True
        intents.message_content = True
        super().__init__(intents=intents)

        self.config: ConfigurationSet = config
        self.panel: PanelClient = panel or PanelClient(config)
        self.dispatcher: CommandDispatcher = CommandDispatcher(config, self.panel)

    async def setup_hook(self) -> None:
        """Se ejecuta una vez antes de conectar al gateway."""
        await self.panel.start()

    async def close(self) -> None:
        """Cierra la sesión HTTP del panel y la conexión con Discord."""
        await self.panel.close()
        await super().close()

    async def on_ready(self) -> None:
        logger.info(f"Conectado como {self.user} ({len(self.config.server_uuids)} servidores configurados)")

    async def on_message(self, message: discord.Message) -> None:
        """Envía al canal cada respuesta según se va generando."""
        self_id = self.user.id if self.user else None
        try:
            async for reply in self.dispatcher.iter_replies(message.content, message.author.id, self_id):
                try:
                    await message.channel.send(reply)
                except discord.Forbidden:
                    logger.error(f"Sin permisos para enviar mensaje en {message.channel}")
                except discord.HTTPException as e:
                    logger.error(f"Error HTTP al enviar mensaje: {e}")
        except Exception as e:
            logger.exception(f"Error procesando '{message.content}' en {message.channel}: {e!r}")


async def _run(config: ConfigurationSet) -> None:
    bot = StatusBot(config)
    loop = asyncio.get_running_loop()
    pending: Set[asyncio.Task] = set()

    def request_shutdown(sig: signal.Signals) -> None:
        logger.info(f"Recibida {sig.name}, cerrando sesión de Discord...")
        task = loop.create_task(bot.close())
        pending.add(task)
        task.add_done_callback(pending.discard)

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, request_shutdown, sig)
        except NotImplementedError:
            # Windows: SIGINT llega como KeyboardInterrupt
            logger.debug(f"No se puede registrar {sig.name} en este sistema")

    async with bot:
        await bot.start(config.bot_token)


def run_bot(config: ConfigurationSet) -> None:
    """Arranca el bot y bloquea hasta que se cierra la sesión."""
    try:
        asyncio.run(_run(config))
    except KeyboardInterrupt:
        logger.info("Interrumpido por teclado")
    logger.info("Bot detenido")


def main() -> None:
    """Punto de entrada del proceso."""
    discord.utils.setup_logging(root=True)

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"{e.message}. Abortando antes de conectar a Discord.")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)
    logger.info("Arrancando...")
    run_bot(config)
