import re
import io
from typing import Optional

import discord

from utility.status_helpers import ServerStatus
from utility.logger import get_logger
log = get_logger()


async def log_command(ctx):
    """Log who ran which command where, before doing the work."""
    guild = f"{ctx.guild.name} ({ctx.guild.id})" if ctx.guild else "DM"
    log.info(f"[Command] {ctx.author} ({ctx.author.id}) in {guild}: {ctx.message.content}")


def validate_string(
    name: str,
    min_length: int = 1,
    max_length: int = 32,
    strict_alphanumeric: bool = True,
) -> str:
    """
    Validates a nickname.

    Args:
        name (str): The name to validate.
        min_length (int): The minimum allowed length.
        max_length (int): The maximum allowed length.
        strict_alphanumeric (bool): If True, restrict to letters, numbers, dots, dashes, and underscores.

    Returns:
        str: An error message if invalid; otherwise, an empty string.
    """
    if len(name) < min_length:
        return f"Name must be at least {min_length} characters long."
    if len(name) > max_length:
        return f"Name cannot exceed {max_length} characters."
    if strict_alphanumeric and not re.match(r"^[\w.-]+$", name):
        return "Name can only contain letters, numbers, dots, dashes, and underscores."
    return ""


def parse_days(value: str) -> Optional[int]:
    """Parse the day count of a graph request. None if it isn't a positive integer."""
    try:
        days = int(value)
    except (TypeError, ValueError):
        return None
    return days if days > 0 else None


def format_players(status: ServerStatus) -> str:
    return f"{status.online}/{status.max}"


def favicon_file(status: ServerStatus) -> Optional[discord.File]:
    if not status.favicon:
        return None
    return discord.File(io.BytesIO(status.favicon), filename="favicon.png")
