"""Shared fixtures: a BotContext backed by tmp_path files and fake status responses."""

import os

import pytest

from config.root_config import Config, StatsConfig, BotConfig
from state.context import BotContext
from utility.locale_helpers import load_languages
from utility.status_helpers import ServerStatus, StatusQueryError

LOCALES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "locales")


def make_status(online=7, max_players=20, names=None, favicon=None):
    return ServerStatus(
        online=online,
        max=max_players,
        version="1.20.4",
        motd="A Minecraft Server",
        latency_ms=12,
        favicon=favicon,
        player_names=names or [],
    )


class FakeQuery:
    """Stands in for query_status: address -> count, or an exception to raise."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    async def __call__(self, address, timeout):
        self.calls.append((address, timeout))
        response = self.responses.get(address)
        if response is None:
            raise StatusQueryError(address, "connection refused")
        if isinstance(response, Exception):
            raise response
        return make_status(online=response)


@pytest.fixture
def config(tmp_path):
    return Config(
        bot=BotConfig(locales_dir=LOCALES_DIR),
        stats=StatsConfig(
            query_timeout_sec=0.5,
            registry_path=str(tmp_path / "servers.yaml"),
            history_path=str(tmp_path / "player_data.yaml"),
            state_path=str(tmp_path / "state.yaml"),
        ),
    )


@pytest.fixture
def context(config):
    return BotContext(config=config, languages=load_languages(LOCALES_DIR))


@pytest.fixture
def status_factory():
    return make_status


@pytest.fixture
def fake_query():
    return FakeQuery
