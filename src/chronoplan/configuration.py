# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "chronoplan"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_EVENTS_DIR: Path = DATA_PATH / "events"
DATA_RECURRING_EVENTS_DIR: Path = DATA_PATH / "recurring_events"
DATA_LABEL_TIME_BUCKETS_DIR: Path = DATA_PATH / "label_time_buckets"
DATA_BADGES_DIR: Path = DATA_PATH / "badges"
DEFAULT_LOG_FILE: Path = platformdirs.user_log_path(APP_NAME) / "chronoplan.log"


class Configuration(TypedDict):
    user_id: str
    timezone: str
    data_path: Optional[str]
    log_level: str
    log_file: Optional[str]
    show_header: bool


def get_default_configuration() -> Configuration:
    return {
        "user_id": "me",
        "timezone": "UTC",
        "data_path": None,
        "log_level": "WARNING",
        "log_file": None,
        "show_header": True,
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_* variables dynamically.

    This must be called after the config file exists and before any
    repositories load their data.
    """
    global \
        DATA_PATH, \
        DATA_EVENTS_DIR, \
        DATA_RECURRING_EVENTS_DIR, \
        DATA_LABEL_TIME_BUCKETS_DIR, \
        DATA_BADGES_DIR

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)

        DATA_EVENTS_DIR = DATA_PATH / "events"
        DATA_RECURRING_EVENTS_DIR = DATA_PATH / "recurring_events"
        DATA_LABEL_TIME_BUCKETS_DIR = DATA_PATH / "label_time_buckets"
        DATA_BADGES_DIR = DATA_PATH / "badges"


def data_dirs() -> list[Path]:
    return [
        DATA_EVENTS_DIR,
        DATA_RECURRING_EVENTS_DIR,
        DATA_LABEL_TIME_BUCKETS_DIR,
        DATA_BADGES_DIR,
    ]
