"""
Runtime configuration.

Values come from the environment (optionally a .env file in the working
directory) with the defaults below.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(encoding="utf-8")

# =============================================================================
# Source
# =============================================================================
BASE_URL = os.getenv("REGMEM_BASE_URL", "http://www.publications.parliament.uk/pa/cm/cmregmem")
USER_AGENT = os.getenv("REGMEM_USER_AGENT", "regmem/0.1 (+register of members' financial interests)")

# =============================================================================
# HTTP
# =============================================================================
TIMEOUT = int(os.getenv("REGMEM_TIMEOUT", "30"))
MAX_RETRIES = int(os.getenv("REGMEM_MAX_RETRIES", "10"))
BACKOFF_FACTOR = float(os.getenv("REGMEM_BACKOFF_FACTOR", "1.0"))
WORKERS = int(os.getenv("REGMEM_WORKERS", "4"))

# =============================================================================
# Paths
# =============================================================================
CACHE_DIR = Path(os.getenv("REGMEM_CACHE_DIR", "cache"))
OUTPUT = Path(os.getenv("REGMEM_OUTPUT", "members-financial-interests.csv"))

# =============================================================================
# Logging
# =============================================================================
LOG_LEVEL = os.getenv("REGMEM_LOG_LEVEL", "INFO")


class Config:
    """Typed access to settings."""

    base_url: str = BASE_URL
    user_agent: str = USER_AGENT

    timeout: int = TIMEOUT
    max_retries: int = MAX_RETRIES
    backoff_factor: float = BACKOFF_FACTOR
    workers: int = WORKERS

    cache_dir: Path = CACHE_DIR
    output: Path = OUTPUT

    log_level: str = LOG_LEVEL


config = Config()
