import os
import yaml
from dataclasses import dataclass, field
from typing import Dict, Optional

from state.registry import Registry
from state.player_history import PlayerHistory
from utility.logger import get_logger
log = get_logger()


@dataclass
class State:
    """Per-guild settings changed through chat commands."""
    languages: Dict[str, str] = field(default_factory=dict)
    prefixes: Dict[str, str] = field(default_factory=dict)
    notify_channels: Dict[str, int] = field(default_factory=dict)

    def get_language(self, guild_id, default: str) -> str:
        return self.languages.get(str(guild_id), default)

    def get_prefix(self, guild_id, default: str) -> str:
        return self.prefixes.get(str(guild_id), default)

    def get_notify_channel(self, guild_id) -> Optional[int]:
        return self.notify_channels.get(str(guild_id))


# ──────────────────────────
# YAML snapshot helpers
# ──────────────────────────
def _read_yaml(file_path: str):
    with open(file_path, "r", encoding="utf-8") as file:
        return yaml.safe_load(file) or {}

def _write_yaml(file_path: str, data):
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    # Write next to the target and swap so a crash never leaves half a file
    tmp_path = f"{file_path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as file:
        yaml.safe_dump(data, file, default_flow_style=False, allow_unicode=True)
    os.replace(tmp_path, file_path)


# ──────────────────────────
# State keeping
# ──────────────────────────
def load_state(file_path: str) -> State:
    """
    Load guild settings from a YAML file.
    A missing or unreadable file gives a fresh State.
    """
    if not os.path.exists(file_path):
        return State()
    try:
        data = _read_yaml(file_path)
        state = State(
            languages={str(k): v for k, v in (data.get("languages") or {}).items()},
            prefixes={str(k): v for k, v in (data.get("prefixes") or {}).items()},
            notify_channels={str(k): int(v) for k, v in (data.get("notify_channels") or {}).items()},
        )
    except Exception as e:
        log.error(f"Failed to load state: {e}")
        return State()
    log.debug("Finished loading state")
    return state

def save_state(state: State, file_path: str) -> bool:
    try:
        _write_yaml(file_path, {
            "languages": state.languages,
            "prefixes": state.prefixes,
            "notify_channels": state.notify_channels,
        })
    except Exception as e:
        log.error(f"Failed to save state: {e}")
        return False
    return True


def load_registry(file_path: str) -> Registry:
    if not os.path.exists(file_path):
        log.info(f"No server list at {file_path}, starting empty.")
        return Registry()
    try:
        registry = Registry.from_dict(_read_yaml(file_path))
    except Exception as e:
        log.error(f"Failed to load server list: {e}")
        return Registry()
    log.info(f"Loaded {len(registry)} servers across {len(registry.guild_ids())} guilds")
    return registry

def save_registry(registry: Registry, file_path: str) -> bool:
    """
    Write the whole registry. On failure the in-memory registry stays
    authoritative and stays dirty so the next tick retries.
    """
    try:
        _write_yaml(file_path, registry.to_dict())
    except Exception as e:
        log.error(f"Failed to save server list: {e}")
        return False
    registry.dirty = False
    return True


def load_history(file_path: str) -> PlayerHistory:
    if not os.path.exists(file_path):
        log.info(f"No player data at {file_path}, starting empty.")
        return PlayerHistory()
    try:
        history = PlayerHistory.from_dict(_read_yaml(file_path))
    except Exception as e:
        log.error(f"Failed to load player data: {e}")
        return PlayerHistory()
    log.debug("Finished loading player data")
    return history

def save_history(history: PlayerHistory, file_path: str) -> bool:
    try:
        _write_yaml(file_path, history.to_dict())
    except Exception as e:
        log.error(f"Failed to save player data: {e}")
        return False
    return True
