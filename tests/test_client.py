"""
Tests for WsIrcClient driven by an in-memory transport.
"""

import logging
from unittest.mock import AsyncMock, Mock, patch

import pytest

from tests.fixtures.fake_transport import FakeTransport, transport_error
from wsirc.client import WsIrcClient
from wsirc.config import ClientConfig
from wsirc.errors.internal import ConfigurationError, NotConnectedError, TransportError

CONFIG = {"server": "bridge.example", "port": 7667, "nick": "bot", "probe_on_error": False}
MOTD_END = ":server 376 bot :End of /MOTD command."


@pytest.fixture
def client():
    return WsIrcClient(CONFIG)


class TestConstruction:
    def test_mapping_config_accepted(self, client):
        assert isinstance(client.config, ClientConfig)
        assert client.nickname == "bot"
        assert client.registered is False
        assert client.is_connected is False

    def test_missing_server_fails_before_connecting(self):
        factory = Mock()

        with pytest.raises(ConfigurationError):
            WsIrcClient({"port": 7667}, transport_factory=factory)

        factory.assert_not_called()

    def test_unsupported_config_type_rejected(self):
        with pytest.raises(ConfigurationError):
            WsIrcClient("bridge.example:7667")  # type: ignore[arg-type]

    def test_default_transport_uses_config_url(self):
        factory = Mock(return_value=FakeTransport())
        client = WsIrcClient({**CONFIG, "secure": True}, transport_factory=factory)

        assert client.config.url == "wss://bridge.example:7667"
        assert client.handle() is client.handler


class TestConnect:
    @pytest.mark.asyncio
    async def test_handshake_then_open_hook(self, client):
        transport = FakeTransport()
        order = []
        client.handle().on_open(lambda: order.append(list(transport.sent)))

        await client.connect(transport)

        assert transport.sent == ["USER websocket * * :websocket", "NICK bot"]
        assert order == [["USER websocket * * :websocket", "NICK bot"]]

    @pytest.mark.asyncio
    async def test_full_session_delivers_events_in_order(self, client):
        transport = FakeTransport(
            [
                "PING :first",
                MOTD_END,
                ":bot!~b@host JOIN :#room",
                ":server 353 bot = #room :bot alice",
                ":alice!~a@host PRIVMSG #room :hello there",
            ]
        )
        seen = []
        (
            client.handle()
            .on_connect(lambda: seen.append(("connect",)))
            .on_join(lambda channel: seen.append(("join", channel)))
            .on_names(lambda channel, names: seen.append(("names", channel, names)))
            .on_message(lambda sender, text: seen.append(("message", sender, text)))
            .on_close(lambda: seen.append(("close",)))
        )

        await client.connect(transport)

        assert seen == [
            ("connect",),
            ("join", "#room"),
            ("names", "#room", ["bot", "alice"]),
            ("message", "alice", "hello there"),
            ("close",),
        ]
        assert "PONG :first" in transport.sent
        assert client.registered is True

    @pytest.mark.asyncio
    async def test_commands_from_connect_hook(self, client):
        transport = FakeTransport([MOTD_END])

        async def on_connect():
            await client.join("#room")
            await client.send("#room", "hi")

        client.handle().on_connect(on_connect)

        await client.connect(transport)

        assert transport.sent[-2:] == ["JOIN #room", "PRIVMSG #room :hi"]

    @pytest.mark.asyncio
    async def test_nick_collision_before_registration(self, client):
        transport = FakeTransport([":server 433 * bot :Nickname in use", MOTD_END])
        nick_in_use = Mock()
        client.handle().on_nick_in_use(nick_in_use)

        await client.connect(transport)

        assert transport.sent[2] == "NICK bot_"
        assert client.nickname == "bot_"
        nick_in_use.assert_not_called()

    @pytest.mark.asyncio
    async def test_nick_in_use_after_registration(self, client):
        transport = FakeTransport([MOTD_END, ":server 433 bot taken :Nickname in use"])
        nick_in_use = Mock()
        client.handle().on_nick_in_use(nick_in_use)

        await client.connect(transport)

        nick_in_use.assert_called_once_with()
        assert client.nickname == "bot"

    @pytest.mark.asyncio
    async def test_each_connect_gets_fresh_engine(self, client):
        await client.connect(FakeTransport([MOTD_END]))
        first_engine = client.engine

        transport = FakeTransport([])
        await client.connect(transport)

        assert client.engine is not first_engine
        assert client.registered is False

    @pytest.mark.asyncio
    async def test_handler_exception_does_not_stop_loop(self, client):
        transport = FakeTransport(
            [MOTD_END, ":a!b@c PRIVMSG #r :one", ":a!b@c PRIVMSG #r :two"]
        )
        texts = []

        def on_message(sender, text):
            texts.append(text)
            raise RuntimeError("handler bug")

        client.handle().on_message(on_message)

        await client.connect(transport)

        assert texts == ["one", "two"]


class TestTransportFailures:
    @pytest.mark.asyncio
    async def test_open_failure_reports_error_then_close(self, client):
        error = TransportError("refused", operation_type="connect")
        transport = FakeTransport(fail_open=error)
        events = []
        client.handle().on_error(lambda e: events.append(("error", e))).on_close(
            lambda: events.append(("close",))
        )

        await client.connect(transport)

        assert events == [("error", error), ("close",)]
        assert transport.sent == []

    @pytest.mark.asyncio
    async def test_stream_error_reports_error_then_close(self, client):
        error = transport_error()
        transport = FakeTransport([MOTD_END, error, ":a!b@c PRIVMSG #r :late"])
        events = []
        (
            client.handle()
            .on_error(lambda e: events.append(("error", e)))
            .on_close(lambda: events.append(("close",)))
            .on_message(lambda *a: events.append(("message",)))
        )

        await client.connect(transport)

        assert events == [("error", error), ("close",)]
        assert transport.close_calls == 1

    @pytest.mark.asyncio
    async def test_error_runs_bridge_probe_when_enabled(self):
        client = WsIrcClient({**CONFIG, "probe_on_error": True})
        transport = FakeTransport([transport_error()])

        with patch("wsirc.client.probe_bridge", AsyncMock(return_value=None)) as probe:
            await client.connect(transport)

        probe.assert_awaited_once_with("bridge.example", 7667)

    @pytest.mark.asyncio
    async def test_probe_skipped_when_disabled(self, client):
        with patch("wsirc.client.probe_bridge", AsyncMock()) as probe:
            await client.connect(FakeTransport([transport_error()]))

        probe.assert_not_awaited()


class TestCommands:
    @pytest.mark.asyncio
    async def test_command_without_transport_raises(self, client):
        with pytest.raises(NotConnectedError):
            await client.join("#room")

    @pytest.mark.asyncio
    async def test_each_command_sends_one_line(self, client):
        transport = FakeTransport()
        await transport.open()
        client.transport = transport

        await client.send("alice", "hi")
        await client.change_nick("bot2")
        await client.join("#room")
        await client.part("#room")
        await client.mode("#room", "+s")
        await client.kick("#room", "eve", "spam")
        await client.topic("#room", "news")
        await client.names("#room")
        await client.quit("later")

        assert transport.sent == [
            "PRIVMSG alice :hi",
            "NICK bot2",
            "JOIN #room",
            "PART #room",
            "MODE #room +s",
            "KICK #room eve :spam",
            "TOPIC #room :news",
            "NAMES #room",
            "QUIT :later",
        ]

    @pytest.mark.asyncio
    async def test_close_sends_quit_then_closes(self, client):
        transport = FakeTransport()
        await transport.open()
        client.transport = transport

        await client.close()

        assert transport.sent == ["QUIT :bye"]
        assert transport.closed is True

    @pytest.mark.asyncio
    async def test_close_from_hook_ends_session(self, client):
        transport = FakeTransport([MOTD_END, ":a!b@c PRIVMSG #r :ignored"])
        messages = Mock()
        client.handle().on_connect(lambda: client.close("done")).on_message(messages)

        await client.connect(transport)

        assert transport.sent[-1] == "QUIT :done"
        messages.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_without_connection_is_noop(self, client):
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        transport = FakeTransport()
        await transport.open()
        async with WsIrcClient(CONFIG) as client:
            client.transport = transport

        assert transport.sent == ["QUIT :bye"]
        assert transport.closed is True


class TestRawLogging:
    @pytest.mark.asyncio
    async def test_debug_env_logs_raw_lines(self, client, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        caplog.set_level(logging.DEBUG)

        await client.connect(FakeTransport([":server 001 bot :Welcome"]))

        assert client.engine.log_raw is True
        assert any("==> :server 001 bot :Welcome" in r.message for r in caplog.records)

    @pytest.mark.asyncio
    async def test_raw_lines_not_logged_by_default(self, client, caplog, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        caplog.set_level(logging.DEBUG)

        await client.connect(FakeTransport([":server 001 bot :Welcome"]))

        assert client.engine.log_raw is False
        assert not any("==> :server 001" in r.message for r in caplog.records)
