import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from ..config.configuration import LOGS_DIR


############################################################################################################
def setup_logging(logs_dir: Optional[Path] = None, level: str = "DEBUG") -> Path:
    """Add a per-run log file sink, returning its path."""
    target_dir = logs_dir if logs_dir is not None else LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    assert target_dir.exists(), f"找不到目录: {target_dir}"

    log_start_time = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_file = target_dir / f"{log_start_time}.log"
    logger.add(log_file, level=level)
    logger.info(f"Logging to {log_file}")
    return log_file
