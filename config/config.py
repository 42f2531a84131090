import os
import yaml

from config.root_config import *
from utility.logger import get_logger
log = get_logger()

CONFIG_FILE = "config.yaml"

# ──────────────────────────
# Configuration Helper Functions
# ──────────────────────────
def load_config(file_path: str = CONFIG_FILE) -> Config:
    """
    Load the configuration from a YAML file into a Config dataclass.
    Missing sections and keys fall back to the dataclass defaults.
    Args:
        file_path (str): Path to the YAML file.
    Returns:
        Config: The loaded configuration.
    """
    if not os.path.exists(file_path):
        log.error(f"Config file {file_path} not found. Using defaults.")
        return Config()
    try:
        log.debug("Loading config...")
        with open(file_path, "r") as file:
            data = yaml.safe_load(file) or {}
        config = Config(
            bot=BotConfig(**(data.get("bot") or {})),
            stats=StatsConfig(**(data.get("stats") or {})),
            chart=ChartConfig(**(data.get("chart") or {})),
        )
    except Exception as e:
        log.error(f"Failed to load config: {e}")
        return Config()
    log.info("Finished loading config")
    return config
