"""Configuration constants and logging setup."""

import logging

CONFIG_FILE = "appsettings.json"
MANIFEST_NAME = "checksums.json"
SNAPSHOT_PREFIX = "GD_"
STAMP_FORMAT = "%Y%m%d_%H%M%S"
PROGRAM_SUBDIR = "SteamFiles"  # full copy each run
SAVE_SUBDIR = "SaveFiles"  # progress files each run
ASSET_POOL_PARTS = ("Assets", "SaveAssets")  # shared across runs
PROGRESS_EXTENSION = ".dat"
HASH_CHUNK_SIZE = 1024 * 1024  # bytes
GAME_PROCESS_NAMES = ("GeometryDash", "GeometryDash.exe")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("gd_backup")
