# path_helper.py
import os
from pathlib import Path

from platformdirs import user_config_dir as ucfg, user_log_dir as ulog

APP = "CyberCraft"

def user_config_dir(app: str = APP) -> Path:
    override = os.getenv("CYBERCRAFT_DATA_DIR")
    if override:
        return Path(override)
    return Path(ucfg(app))

def user_log_dir(app: str = APP) -> Path:
    override = os.getenv("CYBERCRAFT_LOG_DIR")
    if override:
        return Path(override)
    return Path(ulog(app))
