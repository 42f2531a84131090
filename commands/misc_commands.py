import discord
from discord.ext import commands

import utility.helper_functions as helpers
from utility.logger import get_logger
log = get_logger()

# (usage, locale key of the description)
HELP_ENTRIES = [
    ("status <nickname|ip>", "status_command"),
    ("addserver <nickname> <ip>", "add_server_command"),
    ("servers", "servers_command"),
    ("players <nickname|ip>", "players_command"),
    ("multistatus <ip1> <ip2> ...", "multi_status_command"),
    ("serverinfo <nickname|ip>", "server_info_command"),
    ("graph <nickname> <days>", "graph_command"),
    ("help", "help_command"),
    ("setlang <lang>", "set_lang_command"),
    ("setprefix <prefix>", "set_prefix_command"),
    ("setchannel [off]", "set_channel_command"),
]

def register_commands(bot):

    @bot.command(name="help")
    @commands.guild_only()
    async def help_command(ctx):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        prefix = context.prefix_for(ctx.guild.id)

        embed = discord.Embed(
            title=lang.help_title,
            description=lang.help_description,
            color=context.config.bot.embed_color,
            timestamp=discord.utils.utcnow(),
        )
        for usage, key in HELP_ENTRIES:
            embed.add_field(name=f"`{prefix}{usage}`", value=lang[key], inline=False)
        await ctx.send(embed=embed)


    @bot.command(name="setlang")
    @commands.guild_only()
    async def setlang(ctx, code: str = None):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        if code is None:
            await ctx.reply(lang.provide_language_error)
            return
        if code not in context.languages:
            await ctx.reply(f"{lang.invalid_language} {', '.join(sorted(context.languages))}")
            return

        context.state.languages[str(ctx.guild.id)] = code
        context.save_state()
        # Answer in the new language
        await ctx.reply(f"{context.languages[code].language_set} {context.languages[code].language_name}.")


    @bot.command(name="setprefix")
    @commands.guild_only()
    async def setprefix(ctx, prefix: str = None):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        if not prefix:
            await ctx.reply(lang.provide_prefix_error)
            return

        context.state.prefixes[str(ctx.guild.id)] = prefix
        context.save_state()
        await ctx.reply(f"{lang.prefix_set_to} {prefix}")


    @bot.command(name="setchannel")
    @commands.guild_only()
    async def setchannel(ctx, option: str = None):
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        guild_id = str(ctx.guild.id)

        if option is not None and option.lower() == "off":
            context.state.notify_channels.pop(guild_id, None)
            context.save_state()
            await ctx.reply(lang.notify_channel_cleared)
            return

        context.state.notify_channels[guild_id] = ctx.channel.id
        context.save_state()
        await ctx.reply(lang.notify_channel_set)
