from dataclasses import dataclass, field


@dataclass
class BotConfig:
    bot_token: str = ""
    default_prefix: str = "!"
    default_language: str = "en"
    locales_dir: str = "locales"
    embed_color: int = 0x00FF00


@dataclass
class StatsConfig:
    poll_interval_min: int = 5
    query_timeout_sec: float = 5.0
    registry_path: str = "_data/servers.yaml"
    history_path: str = "_data/player_data.yaml"
    state_path: str = "_data/state.yaml"
    max_graph_days: int = 3650

    def __post_init__(self):
        """ Clamp the interval so tasks.loop never gets a zero or negative value. """
        if self.poll_interval_min < 1:
            self.poll_interval_min = 1


@dataclass
class ChartConfig:
    width_px: int = 800
    height_px: int = 400
    line_color: str = "#4bc0c0"
    dark_theme: bool = True

    # matplotlib works in inches
    @property
    def figsize(self):
        return (self.width_px / 100, self.height_px / 100)


@dataclass
class Config:
    bot: BotConfig = field(default_factory=BotConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)
