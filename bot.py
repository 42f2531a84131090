import os
import sys
import discord
from discord.ext import commands

import config.config as cfg
from state.context import BotContext
from tasks.background_tasks import create_poll_task
from tasks.notification_tasks import StatusNotifier
from utility.logger import get_logger
log = get_logger()

COMMANDS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "commands")


def get_prefix(bot, message):
    if message.guild is None:
        return bot.context.config.bot.default_prefix
    return bot.context.prefix_for(message.guild.id)


def create_bot(context: BotContext) -> commands.Bot:
    intents = discord.Intents.default()
    intents.message_content = True  # Prefix commands read message text

    bot = commands.Bot(command_prefix=get_prefix, intents=intents, help_command=None)
    bot.context = context
    context.notifier = StatusNotifier(bot, context)
    poll_task = create_poll_task(context)

    # Register commands from all .py files in the commands folder
    for filename in sorted(os.listdir(COMMANDS_DIR)):
        if filename.endswith(".py") and not filename.startswith("_"):
            module_name = filename[:-3]
            try:
                module = __import__(f"commands.{module_name}", fromlist=["register_commands"])
                if hasattr(module, "register_commands"):
                    module.register_commands(bot)
                    log.debug(f"Registered commands from {module_name}")
                else:
                    log.warning(f"No register_commands() function in {module_name}, skipping.")
            except Exception as e:
                log.error(f"Error loading {module_name}: {e}")

    # ──────────────────────────
    # Bot Lifecycle
    # ──────────────────────────
    @bot.event
    async def on_ready():
        # on_ready fires again after reconnects
        if not poll_task.is_running():
            poll_task.start()
            log.info(f"Polling {len(context.registry)} servers every {context.config.stats.poll_interval_min} minutes")
        log.info(f"Logged in as {bot.user} (ID: {bot.user.id})")

    @bot.event
    async def on_command_error(ctx, error):
        if isinstance(error, commands.CommandNotFound):
            return
        if isinstance(error, commands.NoPrivateMessage):
            await ctx.send("This command only works in a server.")
            return
        log.error(f"Command {ctx.command} failed: {error}")

    return bot


def main():
    log.info("############### Server Stats Bot Start ###############")
    config = cfg.load_config()
    if not config.bot.bot_token:
        log.error(f"ERROR: No bot_token in {cfg.CONFIG_FILE}. Exiting...")
        sys.exit(1)

    context = BotContext.load(config)
    bot = create_bot(context)
    # Logging is already set up by utility.logger
    bot.run(config.bot.bot_token, log_handler=None)


if __name__ == "__main__":
    main()
