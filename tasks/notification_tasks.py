from typing import Dict, Optional, Tuple

from utility.status_helpers import ServerStatus
from utility.logger import get_logger
log = get_logger()


class StatusNotifier:
    """
    Tracks whether each polled server was last seen online and posts a message
    to the guild's notification channel when that flips.
    The first observation of a server only records its state, so a bot restart
    does not announce every server.
    """

    def __init__(self, bot, context):
        self.bot = bot
        self.context = context
        self.last_online: Dict[Tuple[str, str], bool] = {}

    async def notify(self, guild_id, nickname: str, address: str, is_online: bool,
                     status: Optional[ServerStatus] = None) -> bool:
        """
        Returns:
            bool: True if the state changed since the previous tick.
        """
        key = (str(guild_id), nickname)
        previous = self.last_online.get(key)
        self.last_online[key] = is_online
        if previous is None or previous == is_online:
            return False

        log.info(f"Notifier: {nickname} ({address}) in guild {guild_id} is now {'online' if is_online else 'offline'}")
        channel_id = self.context.state.get_notify_channel(guild_id)
        if channel_id is None:
            return True

        lang = self.context.strings_for(guild_id)
        if is_online and status is not None:
            text = lang.server_came_online.format(nickname=nickname, address=address, online=status.online, max=status.max)
        else:
            text = lang.server_went_offline.format(nickname=nickname, address=address)
        try:
            channel = self.bot.get_channel(channel_id) or await self.bot.fetch_channel(channel_id)
            await channel.send(text)
        except Exception as e:
            log.error(f"Notifier: Failed to post to channel {channel_id} in guild {guild_id}: {e}")
        return True
