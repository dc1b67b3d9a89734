"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("DOMAINS_DB_PATH", "domains.duckdb")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_QUERY_TIMEOUT = float(os.getenv("DB_QUERY_TIMEOUT", "30"))
DB_ACQUIRE_TIMEOUT = float(os.getenv("DB_ACQUIRE_TIMEOUT", "10"))

# Domains table ("schema.table" or "table")
DOMAINS_TABLE = os.getenv("DOMAINS_TABLE", "expired_domains")
DEFAULT_SCHEMA = os.getenv("DOMAINS_DEFAULT_SCHEMA", "main")

# Logging
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Spamhaus Intel API
SPAMHAUS_BASE_URL = os.getenv("SPAMHAUS_INTEL_BASE_URL", "https://api.spamhaus.com").rstrip("/")
SPAMHAUS_API_KEY = (
    os.getenv("SPAMHAUS_INTEL_API_KEY") or os.getenv("SPAMHAUS_API_KEY") or os.getenv("SPAMHAUS_INTEL_TOKEN") or None
)
SPAMHAUS_USERNAME = os.getenv("SPAMHAUS_INTEL_USERNAME") or None
SPAMHAUS_PASSWORD = os.getenv("SPAMHAUS_INTEL_PASSWORD") or None
SPAMHAUS_TIMEOUT = 12.0

# Wayback Machine
WAYBACK_AVAILABILITY_URL = "https://archive.org/wayback/available"
WAYBACK_CDX_URL = "https://web.archive.org/cdx/search/cdx"
WAYBACK_AVAILABILITY_TIMEOUT = 8.0
WAYBACK_CDX_TIMEOUT = 25.0

# Domain checks
CHECK_TTL_SECONDS = int(os.getenv("CHECK_TTL_SECONDS", str(15 * 60)))
