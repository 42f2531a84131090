from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from utility.logger import get_logger
log = get_logger()


@dataclass(frozen=True)
class RegisteredAddress:
    nickname: str
    address: str

@dataclass(frozen=True)
class LiteralAddress:
    address: str

Resolution = Union[RegisteredAddress, LiteralAddress]


class Registry:
    """
    Per-guild mapping of server nicknames to addresses.

    Nicknames are unique within a guild only. Entries are added or overwritten
    by register() and never removed automatically.
    """

    def __init__(self, servers: Dict[str, Dict[str, str]] = None):
        self._servers: Dict[str, Dict[str, str]] = {}
        self.dirty = False
        for guild_id, entries in (servers or {}).items():
            for nickname, address in (entries or {}).items():
                self._servers.setdefault(str(guild_id), {})[str(nickname)] = str(address)

    def register(self, guild_id, nickname: str, address: str):
        guild_id = str(guild_id)
        previous = self._servers.get(guild_id, {}).get(nickname)
        self._servers.setdefault(guild_id, {})[nickname] = address
        self.dirty = True
        if previous is not None and previous != address:
            log.info(f"Registry: guild {guild_id} re-registered {nickname}: {previous} -> {address}")
        else:
            log.info(f"Registry: guild {guild_id} registered {nickname} -> {address}")

    def resolve(self, guild_id, nickname_or_address: str) -> Resolution:
        """
        Look up a nickname for a guild.
        Args:
            guild_id: The guild (tenant) to look in.
            nickname_or_address (str): A registered nickname or a raw address.
        Returns:
            RegisteredAddress if the nickname is known, otherwise a
            LiteralAddress carrying the input unchanged.
        """
        address = self._servers.get(str(guild_id), {}).get(nickname_or_address)
        if address is None:
            log.debug(f"Registry: '{nickname_or_address}' not registered in guild {guild_id}, using it as an address")
            return LiteralAddress(nickname_or_address)
        return RegisteredAddress(nickname_or_address, address)

    def resolve_address(self, guild_id, nickname_or_address: str) -> str:
        return self.resolve(guild_id, nickname_or_address).address

    def list_targets(self, guild_id) -> List[Tuple[str, str]]:
        return list(self._servers.get(str(guild_id), {}).items())

    def guild_ids(self) -> List[str]:
        return list(self._servers.keys())

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {guild_id: dict(entries) for guild_id, entries in self._servers.items()}

    @classmethod
    def from_dict(cls, data) -> "Registry":
        return cls(data or {})

    def __len__(self):
        return sum(len(entries) for entries in self._servers.values())
