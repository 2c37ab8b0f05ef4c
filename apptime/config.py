import os
import sys
import json
import datetime
from typing import Any, Dict


def _data_root() -> str:
    """Per-user application data root for this OS."""
    if sys.platform == "win32":
        return os.environ.get("APPDATA", os.path.expanduser("~\\AppData\\Roaming"))
    return os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))


APP_NAME: str = "apptime"
DATA_DIR: str = os.path.join(_data_root(), APP_NAME)
DATA_FILE: str = os.path.expanduser(
    os.environ.get("APPTIME_DATA_FILE", os.path.join(DATA_DIR, "usage_daily.json"))
)
TICK_INTERVAL: float = 1.0  # seconds
TOP_APPS_DEFAULT: int = 5
CHART_MIN_CEILING: int = 600  # seconds

# User configuration file path
USER_CONFIG_PATH: str = os.path.expanduser("~/.config/apptime/settings.json")

# Debug mode - logs every tick
DEBUG_MODE: bool = os.environ.get("APPTIME_DEBUG", "0") == "1"
DEBUG_LOG_PATH: str = os.path.join(DATA_DIR, "apptime_debug.log")


def debug_log(message: str) -> None:
    """Write debug message to log file if debug mode is enabled."""
    if not DEBUG_MODE:
        return
    timestamp = datetime.datetime.now().isoformat(timespec='milliseconds')
    try:
        os.makedirs(os.path.dirname(DEBUG_LOG_PATH), exist_ok=True)
        with open(DEBUG_LOG_PATH, 'a') as f:
            f.write(f"[{timestamp}] {message}\n")
    except OSError as e:
        print(f"Debug log write failed: {e}")


def log(message: str) -> None:
    """Print a timestamped status line."""
    print(f"[{datetime.datetime.now().isoformat(timespec='seconds')}] {message}")


# --- Dynamic Configuration Class ---

class Config:
    """
    Manages dynamic application settings loaded from the user's JSON file.

    This class holds settings that can be reloaded at runtime.
    """
    DEFAULT_SAVE_INTERVAL_SECONDS: int = 60
    DEFAULT_TOP_APPS_LIMIT: int = TOP_APPS_DEFAULT
    DEFAULT_WEB_PORT: int = 5050

    def __init__(self, config_path: str = USER_CONFIG_PATH):
        self.config_path = config_path
        self._user_config: Dict[str, Any] = {}

        self.save_interval_seconds: int = self.DEFAULT_SAVE_INTERVAL_SECONDS
        self.top_apps_limit: int = self.DEFAULT_TOP_APPS_LIMIT
        self.web_port: int = self.DEFAULT_WEB_PORT

        self.reload()

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user configuration from file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                print(f"Ignoring settings file {self.config_path}: not a JSON object")
            except (json.JSONDecodeError, IOError) as e:
                print(f"Ignoring broken settings file {self.config_path}: {e}")
        return {}

    def _get_int(self, key: str, default: int) -> int:
        value = self._user_config.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            return default
        return value

    def reload(self) -> None:
        """
        Reload configuration from disk, updating this object's attributes.
        """
        self._user_config = self._load_user_config()

        self.save_interval_seconds = self._get_int(
            'save_interval_seconds', self.DEFAULT_SAVE_INTERVAL_SECONDS
        )
        self.top_apps_limit = self._get_int(
            'top_apps_limit', self.DEFAULT_TOP_APPS_LIMIT
        )
        self.web_port = self._get_int('web_port', self.DEFAULT_WEB_PORT)


# Shared instance
settings = Config()
