import os
from typing import Dict

import yaml

from utility.logger import get_logger
log = get_logger()


class Strings(dict):
    """Locale strings; a missing key returns the key itself instead of raising."""

    def __missing__(self, key):
        return key

    def __getattr__(self, key):
        if key.startswith("__"):
            raise AttributeError(key)
        return self[key]


def load_languages(locales_dir: str) -> Dict[str, Strings]:
    """
    Load every <code>.yaml file in locales_dir.
    Returns:
        dict: language code -> Strings
    """
    languages = {}
    if not os.path.isdir(locales_dir):
        log.error(f"Locales directory {locales_dir} not found.")
        return languages
    for filename in sorted(os.listdir(locales_dir)):
        if not filename.endswith((".yaml", ".yml")):
            continue
        code = os.path.splitext(filename)[0]
        try:
            with open(os.path.join(locales_dir, filename), "r", encoding="utf-8") as file:
                languages[code] = Strings(yaml.safe_load(file) or {})
        except Exception as e:
            log.error(f"Failed to load locale {filename}: {e}")
    log.debug(f"Loaded languages: {', '.join(languages) or 'none'}")
    return languages

def get_strings(languages: Dict[str, Strings], code: str, default_code: str = "en") -> Strings:
    if code in languages:
        return languages[code]
    if default_code in languages:
        return languages[default_code]
    return Strings()
