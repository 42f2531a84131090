import asyncio

import discord
from discord.ext import commands

import utility.helper_functions as helpers
import utility.chart_helpers as chart_helpers
from state.player_history import NoPlayerDataError, InvalidWindowError
from utility.logger import get_logger
log = get_logger()


def register_commands(bot):

    @bot.command(name="graph")
    @commands.guild_only()
    async def graph(ctx, nickname: str = None, days: str = None):
        """Line chart of a registered server's daily player count over the last <days> days."""
        await helpers.log_command(ctx)
        context = bot.context
        lang = context.strings_for(ctx.guild.id)
        if nickname is None or days is None:
            await ctx.reply(lang.provide_graph_args_error.format(prefix=context.prefix_for(ctx.guild.id)))
            return

        window_days = helpers.parse_days(days)
        try:
            if window_days is None:
                raise InvalidWindowError(f"Invalid day count {days!r}")
            window = context.history.window(ctx.guild.id, nickname, window_days,
                                            max_days=context.config.stats.max_graph_days)
        except InvalidWindowError:
            await ctx.reply(lang.invalid_days)
            return
        except NoPlayerDataError:
            await ctx.reply(lang.no_player_data)
            return

        # matplotlib is blocking, keep it off the event loop
        image = await asyncio.to_thread(
            chart_helpers.render_player_chart,
            window,
            lang.players_over_time,
            f"{nickname} ({window[0][0]:%Y-%m-%d} - {window[-1][0]:%Y-%m-%d})",
            context.config.chart,
        )
        log.debug(f"graph: Rendered {window_days} day chart for {nickname} in guild {ctx.guild.id}")
        await ctx.send(file=discord.File(image, filename="chart.png"))
