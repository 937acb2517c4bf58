"""Backup password prompt configuration, stored next to the other Flick state"""

import json
import logging

from .shell import state_dir

logger = logging.getLogger("flick_backup.config")

CONFIG_NAME = "backup_config.json"


def config_path():
    return state_dir() / CONFIG_NAME


class BackupPromptConfig:
    """Prompt configuration"""
    def __init__(self):
        self.log_level = "DEBUG"
        self.focus_delay = 0.3  # seconds before focusing the password field
        self.request_keyboard = True
        self.secure_entry = True

    def to_dict(self):
        return {
            "log_level": self.log_level,
            "focus_delay": self.focus_delay,
            "request_keyboard": self.request_keyboard,
            "secure_entry": self.secure_entry,
        }

    @classmethod
    def from_dict(cls, data):
        config = cls()
        config.log_level = str(data.get("log_level", config.log_level)).upper()
        config.focus_delay = float(data.get("focus_delay", config.focus_delay))
        config.request_keyboard = bool(data.get("request_keyboard", config.request_keyboard))
        config.secure_entry = bool(data.get("secure_entry", config.secure_entry))
        return config

    @classmethod
    def load(cls):
        path = config_path()
        try:
            if path.exists():
                with open(path) as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError(f"expected a JSON object, got {type(data).__name__}")
                config = cls.from_dict(data)
                logger.info(f"Loaded config: {config.to_dict()}")
                return config
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading config: {e}")
        logger.info("Using default config")
        return cls()

    def save(self) -> bool:
        path = config_path()
        logger.info(f"Saving config to {path}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False
