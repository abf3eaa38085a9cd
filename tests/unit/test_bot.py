"""Unit tests for the Discord client wiring and process entry point."""

from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import discord
import pytest

from pterostatus import bot as bot_module
from pterostatus.api_client import PanelClient
from pterostatus.bot import StatusBot
from pterostatus.formatting import HELP_MESSAGE, MAP_MESSAGES

BOT_ID = 1000


def make_message(content: str, author_id: int = 42) -> MagicMock:
    message = MagicMock()
    message.content = content
    message.author.id = author_id
    message.channel.send = AsyncMock()
    return message


@pytest.fixture
def panel() -> MagicMock:
    client = MagicMock(spec=PanelClient)
    client.start = AsyncMock()
    client.close = AsyncMock()
    client.get_server_info = AsyncMock()
    return client


@pytest.fixture
def status_bot(config, panel):
    bot = StatusBot(config, panel=panel)
    with patch.object(StatusBot, "user", new_callable=PropertyMock) as user:
        user.return_value = MagicMock(id=BOT_ID)
        yield bot


class TestStatusBot:
    """Test cases for StatusBot."""

    def test_intents(self, status_bot) -> None:
        intents = status_bot.intents
        assert intents.guilds
        assert intents.guild_messages
        assert intents.message_content
        assert not intents.members

    @pytest.mark.asyncio
    async def test_setup_hook_starts_panel(self, status_bot, panel) -> None:
        await status_bot.setup_hook()
        panel.start.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_help_reply_sent_to_channel(self, status_bot) -> None:
        message = make_message("!help")

        await status_bot.on_message(message)

        message.channel.send.assert_awaited_once_with(HELP_MESSAGE)

    @pytest.mark.asyncio
    async def test_map_sends_two_messages_in_order(self, status_bot) -> None:
        message = make_message("!map")

        await status_bot.on_message(message)

        sent = [c.args[0] for c in message.channel.send.await_args_list]
        assert sent == list(MAP_MESSAGES)

    @pytest.mark.asyncio
    async def test_own_message_ignored(self, status_bot) -> None:
        message = make_message("!help", author_id=BOT_ID)

        await status_bot.on_message(message)

        message.channel.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_text_ignored(self, status_bot) -> None:
        message = make_message("!status please")

        await status_bot.on_message(message)

        message.channel.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_failure_does_not_stop_replies(self, status_bot) -> None:
        """Test a failed send is logged and the next reply still goes out."""
        message = make_message("!map")
        error = discord.HTTPException(MagicMock(status=500, reason="Server Error"), "boom")
        message.channel.send.side_effect = [error, None]

        await status_bot.on_message(message)

        assert message.channel.send.await_count == 2

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self, status_bot, panel) -> None:
        panel.get_server_info.side_effect = RuntimeError("unexpected")
        message = make_message("!status")

        await status_bot.on_message(message)

        # Un aviso por servidor configurado, sin abortar el comando
        sent = [c.args[0] for c in message.channel.send.await_args_list]
        assert len(sent) == 2
        assert "A" in sent[0] and "status unavailable" in sent[0]
        assert "B" in sent[1] and "status unavailable" in sent[1]


class TestMain:
    """Test cases for the process entry point."""

    def test_configuration_error_exits_before_connecting(self, monkeypatch) -> None:
        for name in ("API_URL", "API_KEY", "UUID_LIST", "DISCORD_TOKEN"):
            monkeypatch.delenv(name, raising=False)

        with patch.object(bot_module, "run_bot") as run_bot, \
                patch.object(bot_module.discord.utils, "setup_logging"):
            with pytest.raises(SystemExit) as exc_info:
                bot_module.main()

        assert exc_info.value.code == 1
        run_bot.assert_not_called()

    def test_valid_configuration_runs_bot(self, monkeypatch) -> None:
        monkeypatch.setenv("API_URL", "https://panel.example.com")
        monkeypatch.setenv("API_KEY", "key")
        monkeypatch.setenv("UUID_LIST", "a,b")
        monkeypatch.setenv("DISCORD_TOKEN", "token")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("API_TIMEOUT", raising=False)

        with patch.object(bot_module, "run_bot") as run_bot, \
                patch.object(bot_module.discord.utils, "setup_logging"):
            bot_module.main()

        config = run_bot.call_args.args[0]
        assert config.server_uuids == ("a", "b")
        assert config.bot_token == "token"
