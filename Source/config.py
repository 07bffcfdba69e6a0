"""
Centralized configuration for Tabsplit with environment
"""

import os
from decimal import Decimal

# Money settings
CURRENCY_DEFAULT = os.getenv("TABSPLIT_DEFAULT_CURRENCY", "USD")
DISPLAY_QUANTUM = Decimal(os.getenv("TABSPLIT_DISPLAY_QUANTUM", "0.01"))
CONSERVATION_TOLERANCE = Decimal(os.getenv("TABSPLIT_CONSERVATION_TOLERANCE", "0.000001"))

# OCR settings
OCR_PSM = int(os.getenv("TABSPLIT_OCR_PSM", "6"))
OCR_LANGUAGES = os.getenv("TABSPLIT_OCR_LANGUAGES", "eng")

# Runtime settings
DEFAULT_MAX_WORKERS = int(os.getenv("TABSPLIT_MAX_WORKERS", "4"))
LOG_LEVEL = os.getenv("TABSPLIT_LOG_LEVEL", "WARNING")

# Thresholds
DUPLICATE_SIMILARITY_THRESHOLD = float(os.getenv("TABSPLIT_DUP_SIMILARITY", "0.95"))
IMAGE_REGION_OVERLAP_PX = int(os.getenv("TABSPLIT_IMAGE_OVERLAP", "50"))
MAX_IMAGE_SIZE_BYTES = int(os.getenv("TABSPLIT_MAX_IMAGE_SIZE_BYTES", str(50 * 1024 * 1024)))

# Price normalization
ITEM_PRICE_MIN = Decimal(os.getenv("TABSPLIT_ITEM_PRICE_MIN", "0.01"))
ITEM_PRICE_MAX = Decimal(os.getenv("TABSPLIT_ITEM_PRICE_MAX", "10000"))
TOTAL_MISMATCH_TOLERANCE = Decimal(os.getenv("TABSPLIT_TOTAL_MISMATCH_TOLERANCE", "1.0"))

# Workers bounds
WORKERS_MIN = int(os.getenv("TABSPLIT_WORKERS_MIN", "1"))
WORKERS_MAX = int(os.getenv("TABSPLIT_WORKERS_MAX", "16"))
