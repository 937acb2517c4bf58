"""
Flick Backup - shell integration
Logging setup and file-based requests to the Flick compositor
"""

import os
import logging
from pathlib import Path

logger = logging.getLogger("flick_backup.shell")

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def state_dir() -> Path:
    """Flick runtime state directory (FLICK_STATE_DIR overrides)"""
    override = os.environ.get("FLICK_STATE_DIR")
    if override:
        return Path(override)
    return Path.home() / ".local" / "state" / "flick"


def setup_logging(name="flick_backup", level="DEBUG") -> Path:
    """Log to <state_dir>/<name>.log and to the console.

    Replaces whatever handlers are already on the root logger; importing
    kivy installs its own there, which would make basicConfig a no-op.
    """
    log_path = state_dir() / f"{name}.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.DEBUG),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler()
        ],
        force=True
    )
    return log_path


def request_keyboard(show: bool) -> bool:
    """Ask the compositor to show or hide the on-screen keyboard"""
    request_path = state_dir() / "keyboard_request"
    logger.info(f"Requesting keyboard: {'show' if show else 'hide'}")
    try:
        request_path.parent.mkdir(parents=True, exist_ok=True)
        with open(request_path, 'w') as f:
            f.write("show" if show else "hide")
        logger.info(f"Wrote keyboard request to {request_path}")
        return True
    except OSError as e:
        logger.error(f"Failed to write keyboard request: {e}")
        return False
