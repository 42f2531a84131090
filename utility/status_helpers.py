import asyncio
import base64
import binascii
from dataclasses import dataclass, field
from typing import List, Optional

from mcstatus import JavaServer

from utility.logger import get_logger
log = get_logger()

DEFAULT_TIMEOUT_SEC = 5.0


class StatusQueryError(Exception):
    """The server could not be reached or answered with garbage."""

    def __init__(self, address: str, reason: str):
        super().__init__(f"{address}: {reason}")
        self.address = address
        self.reason = reason


@dataclass
class ServerStatus:
    online: int
    max: int
    version: str
    motd: str
    latency_ms: int
    favicon: Optional[bytes] = None
    player_names: List[str] = field(default_factory=list)


# ──────────────────────────
# Status Query
# ──────────────────────────
async def query_status(address: str, timeout: float = DEFAULT_TIMEOUT_SEC) -> ServerStatus:
    """
    Ping a Java edition server once.
    Args:
        address (str): "host" or "host:port". SRV records are honoured.
        timeout (float): Upper bound in seconds for lookup + status together.
    Returns:
        ServerStatus: Parsed status response.
    Raises:
        StatusQueryError: On timeout, connection or protocol errors.
    """
    try:
        return await asyncio.wait_for(_query(address, timeout), timeout=timeout)
    except asyncio.TimeoutError:
        raise StatusQueryError(address, f"timed out after {timeout}s") from None
    except StatusQueryError:
        raise
    except Exception as e:
        raise StatusQueryError(address, str(e) or type(e).__name__) from e

async def _query(address: str, timeout: float) -> ServerStatus:
    server = await JavaServer.async_lookup(address, timeout=timeout)
    # One attempt per call; mcstatus retries 3 times by default
    status = await server.async_status(tries=1)
    online = status.players.online
    if isinstance(online, bool) or not isinstance(online, int) or online < 0:
        raise StatusQueryError(address, f"invalid online player count {online!r}")
    sample = status.players.sample or []
    return ServerStatus(
        online=online,
        max=status.players.max,
        version=status.version.name,
        motd=status.motd.to_plain(),
        latency_ms=round(status.latency),
        favicon=decode_favicon(status.icon),
        player_names=[player.name for player in sample],
    )

def decode_favicon(icon: Optional[str]) -> Optional[bytes]:
    """Turn a "data:image/png;base64,..." favicon into raw PNG bytes."""
    if not icon:
        return None
    try:
        data = base64.b64decode(icon.split(",", 1)[-1], validate=False)
    except (binascii.Error, ValueError) as e:
        log.debug(f"Ignoring undecodable favicon: {e}")
        return None
    return data or None
