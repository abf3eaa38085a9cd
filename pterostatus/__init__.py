"""
PteroStatus - Bot de Discord
Consulta la API cliente de un panel Pterodactyl y publica el estado de los servidores.

By Killerbite95

Estructura del paquete:
    - bot.py: Cliente de Discord, arranque y señales
    - dispatcher.py: Despacho de comandos (!status, !map, !help)
    - api_client.py: Peticiones HTTP al panel
    - formatting.py: Formateo de informes
    - models.py: Dataclasses y decodificación del JSON del panel
    - config.py: Configuración desde variables de entorno
    - exceptions.py: Excepciones personalizadas
"""

from .bot import StatusBot, main, run_bot

__all__ = ["StatusBot", "main", "run_bot"]
__version__ = "1.0.0"
__author__ = "Killerbite95"
