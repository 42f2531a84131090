import asyncio
import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import mcstatus.server
import pytest

import utility.status_helpers as status_helpers
from utility.status_helpers import StatusQueryError, decode_favicon, query_status

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def _java_response(sample=None, icon=None, online=3):
    return SimpleNamespace(
        players=SimpleNamespace(online=online, max=20, sample=sample),
        version=SimpleNamespace(name="Paper 1.20.4"),
        motd=MagicMock(to_plain=MagicMock(return_value="Welcome!")),
        latency=41.6,
        icon=icon,
    )


@pytest.mark.asyncio
async def test_query_status_parses_response():
    icon = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
    server = MagicMock()
    server.async_status = AsyncMock(return_value=_java_response(
        sample=[SimpleNamespace(name="Steve"), SimpleNamespace(name="Alex")], icon=icon))

    with patch.object(status_helpers.JavaServer, "async_lookup", AsyncMock(return_value=server)) as lookup:
        status = await query_status("play.example.com:25565", timeout=2)

    lookup.assert_awaited_once_with("play.example.com:25565", timeout=2)
    assert status.online == 3
    assert status.max == 20
    assert status.version == "Paper 1.20.4"
    assert status.motd == "Welcome!"
    assert status.latency_ms == 42
    assert status.favicon == PNG_BYTES
    assert status.player_names == ["Steve", "Alex"]


@pytest.mark.asyncio
async def test_query_status_without_sample_or_icon():
    server = MagicMock()
    server.async_status = AsyncMock(return_value=_java_response())

    with patch.object(status_helpers.JavaServer, "async_lookup", AsyncMock(return_value=server)):
        status = await query_status("play.example.com")

    assert status.player_names == []
    assert status.favicon is None


@pytest.mark.asyncio
async def test_connection_error_becomes_status_query_error():
    lookup = AsyncMock(side_effect=ConnectionRefusedError("Connection refused"))

    with patch.object(status_helpers.JavaServer, "async_lookup", lookup):
        with pytest.raises(StatusQueryError) as exc_info:
            await query_status("down.example.com")

    assert exc_info.value.address == "down.example.com"
    assert exc_info.value.reason == "Connection refused"


@pytest.mark.asyncio
async def test_slow_server_times_out():
    async def never_answers(address, timeout):
        await asyncio.sleep(60)

    with patch.object(status_helpers, "_query", new=never_answers):
        with pytest.raises(StatusQueryError) as exc_info:
            await query_status("slow.example.com", timeout=0.05)

    assert "timed out" in exc_info.value.reason


def test_decode_favicon():
    encoded = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

    assert decode_favicon(encoded) == PNG_BYTES
    assert decode_favicon(None) is None
    assert decode_favicon("") is None
    assert decode_favicon("data:image/png;base64,%%%") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("online", [-1, "many", None, True])
async def test_bad_online_count_is_a_query_error(online):
    server = MagicMock()
    server.async_status = AsyncMock(return_value=_java_response(online=online))

    with patch.object(status_helpers.JavaServer, "async_lookup", AsyncMock(return_value=server)):
        with pytest.raises(StatusQueryError) as exc_info:
            await query_status("weird.example.com")

    assert "invalid online player count" in exc_info.value.reason


@pytest.mark.asyncio
async def test_status_is_read_without_retries():
    server = MagicMock()
    server.async_status = AsyncMock(return_value=_java_response())

    with patch.object(status_helpers.JavaServer, "async_lookup", AsyncMock(return_value=server)):
        await query_status("play.example.com")

    server.async_status.assert_awaited_once_with(tries=1)


class _FakeConnection:
    def __init__(self, *args, **kwargs):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class _RefusingClient:
    handshakes = 0

    def __init__(self, *args, **kwargs):
        pass

    def handshake(self):
        type(self).handshakes += 1
        raise OSError("Connection reset by peer")

    async def read_status(self):
        raise AssertionError("handshake should have failed first")


@pytest.mark.asyncio
async def test_failing_handshake_is_attempted_once(monkeypatch):
    _RefusingClient.handshakes = 0
    monkeypatch.setattr(mcstatus.server, "TCPAsyncSocketConnection", _FakeConnection)
    monkeypatch.setattr(mcstatus.server, "AsyncJavaClient", _RefusingClient)

    with pytest.raises(StatusQueryError):
        await query_status("127.0.0.1:25565", timeout=2)

    assert _RefusingClient.handshakes == 1
