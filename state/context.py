import asyncio
from dataclasses import dataclass, field
from typing import Dict

from config.root_config import Config
from state.state import State, load_state, save_state, load_registry, save_registry, load_history, save_history
from state.registry import Registry
from state.player_history import PlayerHistory
from utility.locale_helpers import Strings, load_languages, get_strings


@dataclass
class BotContext:
    """Everything the commands and the poller share, owned by the bot instance."""
    config: Config = field(default_factory=Config)
    registry: Registry = field(default_factory=Registry)
    history: PlayerHistory = field(default_factory=PlayerHistory)
    state: State = field(default_factory=State)
    languages: Dict[str, Strings] = field(default_factory=dict)
    notifier: object = None
    tick_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @classmethod
    def load(cls, config: Config) -> "BotContext":
        return cls(
            config=config,
            registry=load_registry(config.stats.registry_path),
            history=load_history(config.stats.history_path),
            state=load_state(config.stats.state_path),
            languages=load_languages(config.bot.locales_dir),
        )

    def strings_for(self, guild_id) -> Strings:
        default = self.config.bot.default_language
        return get_strings(self.languages, self.state.get_language(guild_id, default), default)

    def prefix_for(self, guild_id) -> str:
        return self.state.get_prefix(guild_id, self.config.bot.default_prefix)

    def save_registry(self) -> bool:
        return save_registry(self.registry, self.config.stats.registry_path)

    def save_history(self) -> bool:
        return save_history(self.history, self.config.stats.history_path)

    def save_state(self) -> bool:
        return save_state(self.state, self.config.stats.state_path)
