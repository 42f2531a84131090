import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest

import utility.status_helpers as status_helpers
from bot import create_bot, get_prefix
from utility.status_helpers import StatusQueryError

GUILD_ID = 1234


@pytest.fixture
def bot(context):
    return create_bot(context)


@pytest.fixture
def ctx():
    ctx = MagicMock()
    ctx.guild.id = GUILD_ID
    ctx.channel.id = 555
    ctx.message.content = "!command"
    ctx.send = AsyncMock()
    ctx.reply = AsyncMock()
    return ctx


async def invoke(bot, name, ctx, *args):
    await bot.get_command(name).callback(ctx, *args)


def test_all_commands_registered(bot):
    names = {command.name for command in bot.commands}
    assert names == {
        "status", "serverinfo", "players", "multistatus", "addserver", "servers",
        "graph", "help", "setlang", "setprefix", "setchannel",
    }


@pytest.mark.asyncio
async def test_addserver_registers_and_saves(bot, ctx, context, config):
    await invoke(bot, "addserver", ctx, "alpha", "play.example.com:25565")

    assert context.registry.resolve_address(GUILD_ID, "alpha") == "play.example.com:25565"
    assert not context.registry.dirty
    assert "alpha (play.example.com:25565)" in ctx.reply.await_args.args[0]


@pytest.mark.asyncio
async def test_addserver_usage_and_bad_nickname(bot, ctx, context):
    await invoke(bot, "addserver", ctx, "alpha")
    assert "addserver <nickname> <address>" in ctx.reply.await_args.args[0]

    await invoke(bot, "addserver", ctx, "bad name!", "a.example.com")
    assert len(context.registry) == 0


@pytest.mark.asyncio
async def test_status_resolves_nickname(bot, ctx, context, status_factory):
    context.registry.register(GUILD_ID, "alpha", "play.example.com:25565")
    query = AsyncMock(return_value=status_factory(online=7, max_players=20))

    with patch.object(status_helpers, "query_status", query):
        await invoke(bot, "status", ctx, "alpha")

    query.assert_awaited_once_with("play.example.com:25565", 0.5)
    embed = ctx.send.await_args.kwargs["embed"]
    assert embed.title.endswith("alpha")
    assert "7/20" in [field.value for field in embed.fields]
    assert "file" not in ctx.send.await_args.kwargs


@pytest.mark.asyncio
async def test_status_attaches_favicon(bot, ctx, status_factory):
    query = AsyncMock(return_value=status_factory(favicon=b"\x89PNG"))

    with patch.object(status_helpers, "query_status", query):
        await invoke(bot, "status", ctx, "play.example.com")

    kwargs = ctx.send.await_args.kwargs
    assert isinstance(kwargs["file"], discord.File)
    assert kwargs["embed"].thumbnail.url == "attachment://favicon.png"


@pytest.mark.asyncio
async def test_status_unknown_nickname_is_queried_literally(bot, ctx):
    query = AsyncMock(side_effect=StatusQueryError("nonexistent", "Name or service not known"))

    with patch.object(status_helpers, "query_status", query):
        await invoke(bot, "status", ctx, "nonexistent")

    query.assert_awaited_once_with("nonexistent", 0.5)
    assert ctx.send.await_args.args[0] == "Error checking status of nonexistent: Name or service not known"


@pytest.mark.asyncio
async def test_players_lists_sample(bot, ctx, status_factory):
    query = AsyncMock(return_value=status_factory(names=["Steve", "Alex"]))

    with patch.object(status_helpers, "query_status", query):
        await invoke(bot, "players", ctx, "play.example.com")

    assert ctx.send.await_args.args[0].endswith("play.example.com: Steve, Alex")


@pytest.mark.asyncio
async def test_multistatus_reports_each_server(bot, ctx, status_factory):
    async def fake_query(address, timeout):
        if address == "down.example.com":
            raise StatusQueryError(address, "timed out after 0.5s")
        return status_factory(online=2, max_players=8)

    with patch.object(status_helpers, "query_status", new=fake_query):
        await invoke(bot, "multistatus", ctx, "up.example.com", "down.example.com")

    fields = ctx.send.await_args.kwargs["embed"].fields
    assert [field.name for field in fields] == ["up.example.com", "down.example.com"]
    assert "2/8" in fields[0].value
    assert "timed out" in fields[1].value


@pytest.mark.asyncio
async def test_graph_sends_chart(bot, ctx, context):
    today = datetime.date.today()
    context.history.record_sample(GUILD_ID, "alpha", today - datetime.timedelta(days=2), 4)
    context.history.record_sample(GUILD_ID, "alpha", today, 6)

    await invoke(bot, "graph", ctx, "alpha", "7")

    sent = ctx.send.await_args.kwargs["file"]
    assert sent.filename == "chart.png"
    assert sent.fp.read(8) == b"\x89PNG\r\n\x1a\n"


@pytest.mark.asyncio
async def test_graph_without_data(bot, ctx):
    await invoke(bot, "graph", ctx, "alpha", "7")

    assert ctx.reply.await_args.args[0] == "No player data recorded for that server yet."


@pytest.mark.asyncio
@pytest.mark.parametrize("days", ["0", "-2", "week", "800000"])
async def test_graph_rejects_bad_day_count(bot, ctx, context, days):
    context.history.record_sample(GUILD_ID, "alpha", datetime.date.today(), 1)

    await invoke(bot, "graph", ctx, "alpha", days)

    assert ctx.reply.await_args.args[0] == "The number of days must be a positive whole number."
    ctx.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_setlang_and_setprefix(bot, ctx, context, config):
    await invoke(bot, "setlang", ctx, "es")
    assert context.state.get_language(GUILD_ID, "en") == "es"
    assert ctx.reply.await_args.args[0] == "Idioma cambiado a Español."

    await invoke(bot, "setprefix", ctx, "?")
    assert context.prefix_for(GUILD_ID) == "?"

    message = MagicMock()
    message.guild.id = GUILD_ID
    assert get_prefix(bot, message) == "?"


@pytest.mark.asyncio
async def test_setlang_rejects_unknown_code(bot, ctx, context):
    await invoke(bot, "setlang", ctx, "xx")

    assert "en, es" in ctx.reply.await_args.args[0]
    assert context.state.languages == {}


@pytest.mark.asyncio
async def test_setchannel_on_and_off(bot, ctx, context):
    await invoke(bot, "setchannel", ctx)
    assert context.state.get_notify_channel(GUILD_ID) == 555

    await invoke(bot, "setchannel", ctx, "off")
    assert context.state.get_notify_channel(GUILD_ID) is None


@pytest.mark.asyncio
async def test_help_uses_guild_prefix(bot, ctx, context):
    context.state.prefixes[str(GUILD_ID)] = "?"

    await invoke(bot, "help", ctx)

    names = [field.name for field in ctx.send.await_args.kwargs["embed"].fields]
    assert "`?graph <nickname> <days>`" in names


@pytest.mark.asyncio
async def test_status_with_blank_version(bot, ctx, status_factory):
    result = status_factory()
    result.version = ""

    with patch.object(status_helpers, "query_status", AsyncMock(return_value=result)):
        await invoke(bot, "status", ctx, "play.example.com")

    embed = ctx.send.await_args.kwargs["embed"]
    assert all(field.value for field in embed.fields)
    assert "-" in [field.value for field in embed.fields]
