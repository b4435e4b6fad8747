"""expbackoff constants."""

from pathlib import Path

# Builder defaults
DEFAULT_INITIAL_DELAY_MILLIS = 0
DEFAULT_MAX_DELAY_MILLIS = 0
DEFAULT_MULTIPLIER = 2.0

# Configuration
CONFIG_DIR = Path(".expbackoff")
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.yaml"
LOG_FILE_NAME = "expbackoff.log"

# Preview command
DEFAULT_PREVIEW_ATTEMPTS = 10
MAX_PREVIEW_ATTEMPTS = 100
