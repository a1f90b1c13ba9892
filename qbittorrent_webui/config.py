import os
import dotenv


dotenv.load_dotenv()


# Defaults
VERBOSE = False
LOG_PATH = ""
LOG_LEVEL = "INFO"
LOG_ROTATION = "1 week"
LOG_RETENTION = "1 month"

# qBittorrent WebUI defaults
QBITTORRENT_URL = "http://localhost:8080"
QBITTORRENT_USERNAME = "admin"
QBITTORRENT_PASSWORD = ""
QBITTORRENT_TIMEOUT = ""  # empty: no timeout, same as requests


def _optional_float(value):
    return float(value) if value else None


class Config:
    VERBOSE = os.getenv("VERBOSE", str(VERBOSE)).lower() == "true"

    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL)
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    # qBittorrent Configuration
    QBITTORRENT_URL = os.getenv("QBITTORRENT_URL", QBITTORRENT_URL).rstrip('/')
    QBITTORRENT_USERNAME = os.getenv("QBITTORRENT_USERNAME", QBITTORRENT_USERNAME)
    QBITTORRENT_PASSWORD = os.getenv("QBITTORRENT_PASSWORD", QBITTORRENT_PASSWORD)
    QBITTORRENT_TIMEOUT = _optional_float(os.getenv("QBITTORRENT_TIMEOUT", QBITTORRENT_TIMEOUT))
