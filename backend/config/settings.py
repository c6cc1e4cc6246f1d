"""
Central configuration for geodesy settings.
"""
import os


# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR: str | None = os.getenv("LOG_DIR") or None
RING_BUFFER_SIZE: int = int(os.getenv("RING_BUFFER_SIZE", "2000"))
RING_BUFFER_MIN_LEVEL: str = os.getenv("RING_BUFFER_MIN_LEVEL", "INFO").upper()

# Allowed disagreement (meters) between the series engine and PROJ
UTM_REFERENCE_TOLERANCE_M: float = float(os.getenv("UTM_REFERENCE_TOLERANCE_M", "0.5"))
