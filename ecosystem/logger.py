import logging
import sys
from typing import Dict, Optional

# Behaviours log every flee, pack and boundary turn at debug level.
BEHAVIOURS_LOGGER = "ecosystem.behaviours"


def setup_logging(
    console_log_enabled=True,
    log_filename="ecosystem.log",
    level=logging.INFO,
    module_levels: Optional[Dict[str, int]] = None,
):
    """
    Configures the root logger to output to the console and/or a file.

    Args:
      console_log_enabled (bool): If True, logs will be printed to the console.
      log_filename (str): The file to which to save logs. Falsy disables it.
      level (int): The minimum level of messages to log.
      module_levels (dict): Levels for individual loggers, e.g.
        {BEHAVIOURS_LOGGER: logging.DEBUG} to trace creature decisions
        without the rest of the simulation's debug output.
    """
    log_format = logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
    )

    logger = logging.getLogger()
    if logger.hasHandlers():
        logger.handlers.clear()

    # Handlers filter nothing; loggers decide what is emitted.
    logger.setLevel(level)

    if console_log_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(log_format)
        logger.addHandler(console_handler)

    if log_filename:
        # 'w' mode overwrites the file each run.
        file_handler = logging.FileHandler(log_filename, mode="w")
        file_handler.setFormatter(log_format)
        logger.addHandler(file_handler)

    for name, module_level in (module_levels or {}).items():
        logging.getLogger(name).setLevel(module_level)

    print(f"Logging configured: Console {console_log_enabled}. File {log_filename}")
