"""
Centralized configuration constants.

These values can be overridden via environment variables where noted.
"""

import os

# =============================================================================
# Copy-forward accounting
# =============================================================================

# Number of bins in the copy-forward histogram (one per possible tally value)
COPYFWD_HIST_BINS: int = 256

# Per-key copy-forward tallies stop counting here (fits in one unsigned byte)
COPYFWD_SATURATION: int = COPYFWD_HIST_BINS - 1

# =============================================================================
# Segment windowing
# =============================================================================

# Simulator events per segment when nothing else is configured
DEFAULT_INST_STATS_PERIOD: int = int(os.getenv("FLASH_STATS_DEFAULT_PERIOD", "10000"))

# =============================================================================
# Logging
# =============================================================================

# Rotating log file limits
LOG_MAX_BYTES: int = int(os.getenv("FLASH_STATS_LOG_MAX_BYTES", str(50 * 1024 * 1024)))
LOG_BACKUP_COUNT: int = int(os.getenv("FLASH_STATS_LOG_BACKUP_COUNT", "5"))
