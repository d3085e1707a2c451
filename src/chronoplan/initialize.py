# SPDX-License-Identifier: MIT

from pathlib import Path

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from chronoplan import configuration
from chronoplan.logging_config import configure_logging
from chronoplan.repository.configuration import CONFIGURATION_REPO
from chronoplan.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_file()
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_data_dirs()

    config = CONFIGURATION_REPO.get_config()
    log_file = config["log_file"]
    configure_logging(
        config["log_level"],
        log_path=Path(log_file) if log_file is not None else configuration.DEFAULT_LOG_FILE,
    )
    view_state.set_show_header(config["show_header"])


def __ensure_config_file() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_data_dirs() -> None:
    for data_dir in configuration.data_dirs():
        data_dir.mkdir(parents=True, exist_ok=True)
