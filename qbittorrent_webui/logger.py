import sys

from loguru import logger

from .config import Config


VERBOSE = Config.VERBOSE
LOG_PATH = Config.LOG_PATH
LOG_LEVEL = Config.LOG_LEVEL
LOG_ROTATION = Config.LOG_ROTATION
LOG_RETENTION = Config.LOG_RETENTION


def configure(
    verbose=VERBOSE,
    log_path=LOG_PATH,
    level=LOG_LEVEL,
    rotation=LOG_ROTATION,
    retention=LOG_RETENTION,
    sink=None,
):
    """Replace all loguru sinks with the configured file and console sinks."""
    logger.remove()

    # Log to a file
    if log_path:
        logger.add(
            log_path,
            rotation=rotation,
            retention=retention,
            level=level,
        )

    # Log to console
    if verbose:
        logger.add(
            sink=sink or sys.stderr,
            level=level,
        )

    if verbose or log_path:
        logger.enable("qbittorrent_webui")
    else:
        logger.disable("qbittorrent_webui")


configure()
