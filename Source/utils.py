#!/usr/bin/env python3
"""
Utility functions for Tabsplit
"""

import logging
import mimetypes
import re
import time
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from pathlib import Path
from typing import Optional

from config import DISPLAY_QUANTUM, MAX_IMAGE_SIZE_BYTES

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.gif', '.webp'}

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
}


def validate_image_path(image_path: str) -> bool:
    """Comprehensive image path validation with security checks"""
    if not isinstance(image_path, str):
        logger.warning("Image path must be a string")
        return False

    path = Path(image_path)

    # Security: Basic directory traversal check
    if '..' in path.parts:
        logger.warning("Invalid path pattern: %s", image_path)
        return False

    if not path.is_file():
        logger.warning("File not found: %s", image_path)
        return False

    size = path.stat().st_size
    if size > MAX_IMAGE_SIZE_BYTES:
        logger.warning("File too large: %d bytes (max: %d)", size, MAX_IMAGE_SIZE_BYTES)
        return False

    if path.suffix.lower() not in IMAGE_EXTENSIONS:
        logger.warning("Unsupported file extension: %s", path.suffix)
        return False

    mime_type, _ = mimetypes.guess_type(str(path))
    if mime_type and not mime_type.startswith('image/'):
        logger.warning("Invalid MIME type: %s", mime_type)
        return False

    return True


def round_money(amount: Decimal, quantum: Decimal = DISPLAY_QUANTUM) -> Decimal:
    """Round an amount half-up for display"""
    return Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)


def format_currency(amount, currency: str = 'USD') -> str:
    """Format currency amount with proper symbols"""
    if not isinstance(amount, (int, float, Decimal)) or isinstance(amount, bool):
        return "0.00"

    rounded = round_money(Decimal(str(amount)))
    symbol = CURRENCY_SYMBOLS.get(currency)

    if symbol:
        return f"{symbol}{rounded}"
    return f"{rounded} {currency}"


def try_parse_decimal(value: str) -> Optional[Decimal]:
    """Safely parse an amount from user input, accepting a comma decimal separator"""
    if not isinstance(value, str):
        return None
    cleaned = value.strip().replace(',', '.').lstrip('$€£')
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def try_parse_int(value: str) -> Optional[int]:
    """Safely parse integer from string"""
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        return None


def validate_menu_choice(choice: str, valid_choices: list[str]) -> Optional[str]:
    """Validate a menu choice against allowed options"""
    if not isinstance(choice, str):
        return None
    choice = choice.strip()
    return choice if choice in set(valid_choices) else None


def clean_text_for_display(text: str, max_length: int = 100) -> str:
    """Clean text for safe display in UI"""
    if not isinstance(text, str):
        return ""

    # Remove control characters
    text = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', text)

    # Normalize whitespace
    text = ' '.join(text.split())

    # If too long
    if len(text) > max_length:
        text = text[:max_length-3] + "..."

    return text


class PerformanceTimer:
    """Context manager for timing operations"""

    def __init__(self, operation_name: str, log_result: bool = True):
        self.operation_name = operation_name
        self.log_result = log_result
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.end_time = time.perf_counter()
        if self.log_result:
            logger.info("%s completed in %.3fs", self.operation_name, self.elapsed_time)
        return False

    @property
    def elapsed_time(self) -> Optional[float]:
        """Get elapsed time if timing is complete"""
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return None
