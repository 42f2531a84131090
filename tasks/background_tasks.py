import datetime
from dataclasses import dataclass
from typing import List, Optional

from discord.ext import tasks

import utility.status_helpers as status_helpers
from utility.logger import get_logger
log = get_logger()


@dataclass
class PollResult:
    guild_id: str
    nickname: str
    address: str
    online: bool
    player_count: Optional[int] = None
    error: Optional[str] = None


async def poll_servers(context, query=None, today: Optional[datetime.date] = None) -> List[PollResult]:
    """
    One tick: query every registered server of every guild once and record
    today's player count for the ones that answered.
    Args:
        context (BotContext): Shared registry, history and notifier.
        query: Coroutine function (address, timeout) -> ServerStatus.
            Defaults to utility.status_helpers.query_status.
        today (date): Date to file samples under. Defaults to the local date.
    Returns:
        list: One PollResult per target, or [] if another tick is still running.
    """
    if context.tick_lock.locked():
        log.warning("Task poll_servers: Previous tick still running, skipping this one.")
        return []

    query = query or status_helpers.query_status
    timeout = context.config.stats.query_timeout_sec
    results = []
    async with context.tick_lock:
        today = today or datetime.date.today()
        for guild_id in context.registry.guild_ids():
            for nickname, address in context.registry.list_targets(guild_id):
                try:
                    status = await query(address, timeout)
                    context.history.record_sample(guild_id, nickname, today, status.online)
                except status_helpers.StatusQueryError as e:
                    log.debug(f"Task poll_servers: {nickname} ({address}) in guild {guild_id} failed: {e.reason}")
                    results.append(PollResult(guild_id, nickname, address, online=False, error=e.reason))
                    await _notify(context, guild_id, nickname, address, False)
                    continue
                except Exception as e:
                    log.error(f"Task poll_servers: Unexpected error polling {nickname} ({address}): {e}")
                    results.append(PollResult(guild_id, nickname, address, online=False, error=str(e)))
                    await _notify(context, guild_id, nickname, address, False)
                    continue

                results.append(PollResult(guild_id, nickname, address, online=True, player_count=status.online))
                log.debug(f"Task poll_servers: {nickname} ({address}) in guild {guild_id}: {status.online}/{status.max}")
                await _notify(context, guild_id, nickname, address, True, status)

        context.save_history()
        context.save_registry()

    online = sum(1 for r in results if r.online)
    log.info(f"Task poll_servers: Checked {len(results)} servers, {online} online, {len(results) - online} failed")
    return results

async def _notify(context, guild_id, nickname, address, is_online, status=None):
    if context.notifier is None:
        return
    try:
        await context.notifier.notify(guild_id, nickname, address, is_online, status)
    except Exception as e:
        log.error(f"Task poll_servers: Notifier failed for {nickname} in guild {guild_id}: {e}")


def create_poll_task(context):
    """Build the tasks.loop that runs poll_servers every stats.poll_interval_min minutes."""
    @tasks.loop(minutes=context.config.stats.poll_interval_min)
    async def poll_servers_task():
        await poll_servers(context)

    @poll_servers_task.error
    async def poll_servers_error(error):
        log.error(f"Task poll_servers: Tick crashed: {error}")

    return poll_servers_task
