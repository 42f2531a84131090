#!/usr/bin/env python3
"""
Convert the JSON files written by the old JavaScript bot
(serverList.json, playerData.json) into the YAML files this bot reads.

Usage:
    python scripts/import_json_data.py [serverList.json] [playerData.json]
"""

import os
import sys
import json

# Allow running as "python scripts/import_json_data.py" from the repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config.config as cfg
from state.registry import Registry
from state.player_history import PlayerHistory
from state.state import load_registry, save_registry, load_history, save_history

# ─────────────────────────────────────────────────────────────────────────
# CONFIG
# ─────────────────────────────────────────────────────────────────────────

DEFAULT_SERVER_LIST = "serverList.json"
DEFAULT_PLAYER_DATA = "playerData.json"


def merge_server_list(registry: Registry, data) -> int:
    """Register every guild -> nickname -> ip entry. Returns how many were imported."""
    imported = 0
    for guild_id, servers in (data or {}).items():
        for nickname, address in (servers or {}).items():
            registry.register(guild_id, nickname, address)
            imported += 1
    return imported

def merge_player_data(history: PlayerHistory, data) -> int:
    """Copy every guild -> nickname -> date -> count sample. Existing days are overwritten."""
    imported = 0
    for guild_id, servers in (data or {}).items():
        for nickname, days in (servers or {}).items():
            for date_str, count in (days or {}).items():
                history.record_sample(guild_id, nickname, date_str, int(count))
                imported += 1
    return imported

def _read_json(path):
    if not os.path.isfile(path):
        print(f"{path} not found, skipping.")
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

# ─────────────────────────────────────────────────────────
# MAIN
# ─────────────────────────────────────────────────────────

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    server_list_path = argv[0] if len(argv) > 0 else DEFAULT_SERVER_LIST
    player_data_path = argv[1] if len(argv) > 1 else DEFAULT_PLAYER_DATA
    config = cfg.load_config()

    server_list = _read_json(server_list_path)
    if server_list is not None:
        registry = load_registry(config.stats.registry_path)
        count = merge_server_list(registry, server_list)
        save_registry(registry, config.stats.registry_path)
        print(f"Imported {count} servers into {config.stats.registry_path}")

    player_data = _read_json(player_data_path)
    if player_data is not None:
        history = load_history(config.stats.history_path)
        count = merge_player_data(history, player_data)
        save_history(history, config.stats.history_path)
        print(f"Imported {count} daily samples into {config.stats.history_path}")


if __name__ == "__main__":
    main()
