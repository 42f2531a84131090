import datetime
from typing import Dict, List, Optional, Tuple

from utility.logger import get_logger
log = get_logger()

DATE_FORMAT = "%Y-%m-%d"
MAX_WINDOW_DAYS = 3650


class PlayerHistoryError(Exception):
    """Base class for chart window errors."""

class NoPlayerDataError(PlayerHistoryError):
    """The target was never successfully polled."""

class InvalidWindowError(PlayerHistoryError):
    """The window size is not a positive integer."""


class PlayerHistory:
    """
    Daily online-player samples, keyed guild -> nickname -> "YYYY-MM-DD".
    Only one sample is kept per day; the last successful poll of the day wins.
    """

    def __init__(self, samples: Dict[str, Dict[str, Dict[str, int]]] = None):
        self._samples: Dict[str, Dict[str, Dict[str, int]]] = {}
        for guild_id, servers in (samples or {}).items():
            for nickname, days in (servers or {}).items():
                series = self._samples.setdefault(str(guild_id), {}).setdefault(str(nickname), {})
                for date_key, count in (days or {}).items():
                    # yaml turns unquoted ISO dates into date objects
                    series[_date_key(date_key)] = int(count)

    def record_sample(self, guild_id, nickname: str, date: datetime.date, count: int):
        if count < 0:
            raise ValueError(f"Player count cannot be negative: {count}")
        series = self._samples.setdefault(str(guild_id), {}).setdefault(nickname, {})
        series[_date_key(date)] = int(count)

    def get_sample(self, guild_id, nickname: str, date: datetime.date) -> Optional[int]:
        return self._samples.get(str(guild_id), {}).get(nickname, {}).get(_date_key(date))

    def has_samples(self, guild_id, nickname: str) -> bool:
        return bool(self._samples.get(str(guild_id), {}).get(nickname))

    def window(self, guild_id, nickname: str, days: int,
               today: Optional[datetime.date] = None, max_days: int = MAX_WINDOW_DAYS) -> List[Tuple[datetime.date, int]]:
        """
        Build chart input for the last `days` calendar days.
        Args:
            guild_id: The guild (tenant) owning the server.
            nickname (str): Registered server nickname.
            days (int): Window length, today included.
            today (date): End of the window. Defaults to the local date.
            max_days (int): Largest window accepted.
        Returns:
            list: `days` (date, count) pairs, oldest first. Days without a
            sample count as 0.
        Raises:
            InvalidWindowError: days is not a positive integer or exceeds max_days.
            NoPlayerDataError: the server has no samples at all.
        """
        if isinstance(days, bool) or not isinstance(days, int) or days < 1:
            raise InvalidWindowError(f"Window must be a positive number of days, got {days!r}")
        if days > max_days:
            raise InvalidWindowError(f"Window of {days} days exceeds the {max_days} day limit")
        if not self.has_samples(guild_id, nickname):
            raise NoPlayerDataError(f"No player data for {nickname} in guild {guild_id}")

        today = today or datetime.date.today()
        series = self._samples[str(guild_id)][nickname]
        window = []
        for offset in range(days - 1, -1, -1):
            day = today - datetime.timedelta(days=offset)
            window.append((day, series.get(_date_key(day), 0)))
        return window

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, int]]]:
        return {
            guild_id: {nickname: dict(days) for nickname, days in servers.items()}
            for guild_id, servers in self._samples.items()
        }

    @classmethod
    def from_dict(cls, data) -> "PlayerHistory":
        return cls(data or {})


def _date_key(date) -> str:
    if isinstance(date, (datetime.date, datetime.datetime)):
        return date.strftime(DATE_FORMAT)
    return str(date)
