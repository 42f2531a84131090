import discord
from discord.ext import commands

import utility.helper_functions as helpers
import utility.status_helpers as status_helpers
from utility.logger import get_logger
log = get_logger()


async def fetch_status(context, guild_id, target: str):
    """Resolve a nickname or address for the guild and query it once."""
    address = context.registry.resolve_address(guild_id, target)
    return await status_helpers.query_status(address, context.config.stats.query_timeout_sec)


def register_commands(bot):

    @bot.command(name="status")
    @commands.guild_only()
    async def status(ctx, target: str = None):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        if target is None:
            await ctx.reply(lang.provide_server_error)
            return

        try:
            result = await fetch_status(context, ctx.guild.id, target)
        except status_helpers.StatusQueryError as e:
            log.warning(f"status: {e}")
            await ctx.send(f"{lang.error_checking_status} {target}: {e.reason}")
            return

        embed = discord.Embed(
            title=f"{lang.mc_server_status} {target}",
            color=context.config.bot.embed_color,
            timestamp=discord.utils.utcnow(),
        )
        embed.add_field(name=f"{lang.online} 🟢", value=lang.yes_answer, inline=True)
        embed.add_field(name=f"{lang.players} 👥", value=helpers.format_players(result), inline=True)
        embed.add_field(name=f"{lang.version} 🔢", value=result.version or "-", inline=True)
        embed.add_field(name=f"{lang.latency} ⏱️", value=f"{result.latency_ms}ms", inline=True)
        await _send_with_favicon(ctx, embed, result)


    @bot.command(name="serverinfo")
    @commands.guild_only()
    async def serverinfo(ctx, target: str = None):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        if target is None:
            await ctx.reply(lang.provide_server_error)
            return

        try:
            result = await fetch_status(context, ctx.guild.id, target)
        except status_helpers.StatusQueryError as e:
            log.warning(f"serverinfo: {e}")
            await ctx.send(f"{lang.error_checking_info} {target}: {e.reason}")
            return

        embed = discord.Embed(
            title=f"{lang.server_info} {target}",
            color=context.config.bot.embed_color,
            timestamp=discord.utils.utcnow(),
        )
        # Embed field values can't be empty
        embed.add_field(name=f"{lang.motd} 📝", value=result.motd.strip() or "-", inline=False)
        embed.add_field(name=f"{lang.version} 🔢", value=result.version or "-", inline=True)
        embed.add_field(name=f"{lang.players} 👥", value=helpers.format_players(result), inline=True)
        embed.add_field(name=f"{lang.latency} ⏱️", value=f"{result.latency_ms}ms", inline=True)
        await _send_with_favicon(ctx, embed, result)


    @bot.command(name="players")
    @commands.guild_only()
    async def players(ctx, target: str = None):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        if target is None:
            await ctx.reply(lang.provide_server_error)
            return

        try:
            result = await fetch_status(context, ctx.guild.id, target)
        except status_helpers.StatusQueryError as e:
            log.warning(f"players: {e}")
            await ctx.send(f"{lang.error_checking_players} {target}: {e.reason}")
            return

        if result.player_names:
            await ctx.send(f"{lang.online_players} {target}: {', '.join(result.player_names)}")
        else:
            await ctx.send(f"{lang.no_player_info} {target}")


    @bot.command(name="multistatus")
    @commands.guild_only()
    async def multistatus(ctx, *targets: str):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        if not targets:
            await ctx.reply(lang.provide_servers_error)
            return

        embed = discord.Embed(
            title=lang.multi_server_status,
            color=context.config.bot.embed_color,
            timestamp=discord.utils.utcnow(),
        )
        # Discord caps an embed at 25 fields
        for target in targets[:25]:
            try:
                result = await fetch_status(context, ctx.guild.id, target)
                value = f"{lang.online}: ✅ | {lang.players}: {helpers.format_players(result)}"
            except status_helpers.StatusQueryError as e:
                value = f"{lang.online}: ❌ | {lang.error}: {e.reason}"
            embed.add_field(name=target, value=value[:1024], inline=False)
        await ctx.send(embed=embed)


    @bot.command(name="addserver")
    @commands.guild_only()
    async def addserver(ctx, nickname: str = None, address: str = None):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        if nickname is None or address is None:
            await ctx.reply(lang.add_server_usage.format(prefix=context.prefix_for(ctx.guild.id)))
            return

        error = helpers.validate_string(nickname)
        if error:
            await ctx.reply(f"{lang.invalid_nickname} {error}")
            return

        context.registry.register(ctx.guild.id, nickname, address)
        context.save_registry()
        await ctx.reply(f"{lang.server_added} {nickname} ({address})")


    @bot.command(name="servers")
    @commands.guild_only()
    async def servers(ctx):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        targets = context.registry.list_targets(ctx.guild.id)
        if not targets:
            await ctx.send(lang.no_servers.format(prefix=context.prefix_for(ctx.guild.id)))
            return

        lines = "\n".join(f"• **{nickname}**: `{address}`" for nickname, address in sorted(targets))
        embed = discord.Embed(title=lang.registered_servers, description=lines[:4096],
                              color=context.config.bot.embed_color)
        await ctx.send(embed=embed)


async def _send_with_favicon(ctx, embed, result):
    favicon = helpers.favicon_file(result)
    if favicon is None:
        await ctx.send(embed=embed)
        return
    embed.set_thumbnail(url="attachment://favicon.png")
    await ctx.send(embed=embed, file=favicon)
