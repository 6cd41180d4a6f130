import json
import os
import logging
from dataclasses import asdict, dataclass, field
from typing import Optional

from .config import DEFAULT_SETTINGS, SETTINGS_FILE

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    auto_highlight: bool = DEFAULT_SETTINGS["auto_highlight"]
    hide_old_bids: bool = DEFAULT_SETTINGS["hide_old_bids"]


@dataclass
class FilterSession:
    """What the user currently has applied. Passed to the controller explicitly."""
    active_filter: Optional[str] = None  # today | week | sort | None
    settings: Settings = field(default_factory=Settings)


class SettingsStore:
    def __init__(self, settings_file: str = SETTINGS_FILE):
        self.settings_file = settings_file

    def load(self) -> Settings:
        settings = Settings()
        if not os.path.exists(self.settings_file):
            logger.info("No settings file found. Using defaults.")
            return settings

        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load settings: {e}")
            return settings

        if not isinstance(data, dict):
            logger.error(f"Ignoring settings file with unexpected content: {self.settings_file}")
            return settings

        # Same defaults as the popup: highlight unless explicitly off, hide only if explicitly on
        settings.auto_highlight = data.get('auto_highlight') is not False
        settings.hide_old_bids = data.get('hide_old_bids') is True
        logger.info(f"Loaded settings: {settings}")
        return settings

    def save(self, settings: Settings):
        directory = os.path.dirname(self.settings_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        try:
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, ensure_ascii=False, indent=2)
            logger.info("Settings saved.")
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
