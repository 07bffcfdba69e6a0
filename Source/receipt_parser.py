"""
Receipt Parser module for Tabsplit
Parses OCR text into bill items, tax, tip and the printed total
"""

import logging
import os
import re
import uuid
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal, InvalidOperation
from difflib import SequenceMatcher
from typing import List, Optional

from config import (
    CURRENCY_DEFAULT,
    DUPLICATE_SIMILARITY_THRESHOLD,
    ITEM_PRICE_MAX,
    ITEM_PRICE_MIN,
    TOTAL_MISMATCH_TOLERANCE,
)
from constants import CURRENCY_INDICATORS, PATTERNS, SKIP_WORDS, TOTAL_SUM_PATTERNS
from data_models import Bill, BillItem, ZERO

logger = logging.getLogger(__name__)

TAX_PATTERN = r'^\s*(?:SALES\s+)?(?:TAX|VAT|GST)\b.*?[ \t]\$?([\d,\.]+)\s*$'
TIP_PATTERN = r'^\s*(?:TIP|GRATUITY|SERVICE\s+CHARGE)\b.*?[ \t]\$?([\d,\.]+)\s*$'

SKIP_RE = re.compile(r'\b(?:' + '|'.join(re.escape(word) for word in SKIP_WORDS) + r')\b')


class ReceiptParser:
    """Parses OCR text to extract bill items and totals"""

    def _generate_item_id(self) -> str:
        """Generate unique item ID (thread-safe)"""
        return f"item_{uuid.uuid4().hex}"

    def _clean_price(self, price_str: str) -> Optional[Decimal]:
        """Clean and convert a price string, None when it is not a plausible price"""
        if not price_str:
            return None

        cleaned = re.sub(r'[^\d,\.]', '', str(price_str))

        # the right-most separator is the decimal point
        if ',' in cleaned and '.' in cleaned:
            if cleaned.rfind(',') > cleaned.rfind('.'):
                cleaned = cleaned.replace('.', '').replace(',', '.')
            else:
                cleaned = cleaned.replace(',', '')
        elif cleaned.count(',') == 1 and len(cleaned.split(',')[1]) <= 2:
            cleaned = cleaned.replace(',', '.')
        else:
            cleaned = cleaned.replace(',', '')

        try:
            price = Decimal(cleaned)
        except InvalidOperation:
            return None

        if ITEM_PRICE_MIN <= price <= ITEM_PRICE_MAX:
            return price
        return None

    def _normalize_text(self, text: str) -> str:
        normalized = ' '.join(text.lower().split())
        normalized = re.sub(r'[^\w\s]', ' ', normalized)
        return ' '.join(normalized.split())

    def _is_valid_item_name(self, name: str) -> bool:
        """Check if the name is likely a valid menu item"""
        if not name or len(name.strip()) < 2:
            return False

        if SKIP_RE.search(self._normalize_text(name)):
            return False

        if not re.search(r'[a-zA-Z]', name):
            return False

        return len(re.sub(r'[\d\s\.\,\-]', '', name)) >= 2

    def _similarity_score(self, str1: str, str2: str) -> float:
        return SequenceMatcher(None, str1.lower(), str2.lower()).ratio()

    def _deduplicate_by_line_similarity(self, text: str) -> str:
        """Remove duplicate lines that appear due to OCR overlapping regions"""
        unique_lines = []
        seen_exact = set()

        for line in text.split('\n'):
            line = line.strip()
            if not line:
                continue

            if line in seen_exact:
                logger.debug("Skipping exact duplicate: %r", line)
                continue

            # overlapping bands only ever repeat nearby lines
            duplicate_of = next(
                (seen for seen in unique_lines[-10:]
                 if self._similarity_score(line, seen) > DUPLICATE_SIMILARITY_THRESHOLD),
                None,
            )
            if duplicate_of is not None:
                logger.debug("Skipping similar duplicate: %r (similar to %r)", line, duplicate_of)
                continue

            unique_lines.append(line)
            seen_exact.add(line)

        return '\n'.join(unique_lines)

    def _make_item(self, name: str, quantity: int, price: Decimal) -> BillItem:
        return BillItem(
            id=self._generate_item_id(),
            name=name,
            price=price,
            quantity=max(1, quantity),
        )

    def _extract_item_from_line(self, line: str) -> Optional[BillItem]:
        """Extract an item from a single line, trying the most specific pattern first"""
        line = line.strip()
        if not line:
            return None

        match = re.search(PATTERNS['qty_unit_total'], line)
        if match:
            name = match.group(1).strip()
            quantity = int(match.group(2))
            unit_price = self._clean_price(match.group(3))
            total_price = self._clean_price(match.group(4))
            if (self._is_valid_item_name(name) and unit_price and total_price
                    and abs(quantity * unit_price - total_price) < Decimal("0.5")):
                logger.debug("Found traditional item: %s %dx%s = %s", name, quantity, unit_price, total_price)
                return self._make_item(name, quantity, total_price)

        match = re.search(PATTERNS['qty_suffix'], line)
        if match:
            name = match.group(1).strip()
            price = self._clean_price(match.group(3))
            if self._is_valid_item_name(name) and price:
                logger.debug("Found qty item (xN format): %s x%s = %s", name, match.group(2), price)
                return self._make_item(name, int(match.group(2)), price)

        match = re.search(PATTERNS['leading_qty'], line)
        if match:
            name = match.group(2).strip()
            price = self._clean_price(match.group(3))
            if self._is_valid_item_name(name) and price:
                logger.debug("Found numbered item: %s %s = %s", match.group(1), name, price)
                return self._make_item(name, int(match.group(1)), price)

        for pattern in ('dash_item', 'simple_item'):
            match = re.search(PATTERNS[pattern], line)
            if match:
                name = match.group(1).strip()
                price = self._clean_price(match.group(2))
                if self._is_valid_item_name(name) and price:
                    logger.debug("Found %s: %s = %s", pattern, name, price)
                    return self._make_item(name, 1, price)

        return None

    def _find_amount(self, pattern: str, text: str) -> Optional[Decimal]:
        for match in re.finditer(pattern, text, re.IGNORECASE | re.MULTILINE):
            amount = self._clean_price(match.group(1))
            if amount:
                return amount
        return None

    def _find_total(self, text: str) -> Optional[Decimal]:
        """Find the printed total amount in the receipt"""
        for pattern in TOTAL_SUM_PATTERNS:
            total = self._find_amount(pattern, text)
            if total:
                logger.debug("Found total: %s", total)
                return total
        return None

    def _sum_amounts(self, pattern: str, text: str) -> Decimal:
        amounts = (self._clean_price(m.group(1))
                   for m in re.finditer(pattern, text, re.IGNORECASE | re.MULTILINE))
        return sum((amount for amount in amounts if amount), ZERO)

    def _detect_currency(self, text: str) -> str:
        """Detect currency used in receipt"""
        counts = {code: len(re.findall(pattern, text, re.IGNORECASE))
                  for code, pattern in CURRENCY_INDICATORS.items()}
        code, count = max(counts.items(), key=lambda pair: pair[1])
        return code if count else CURRENCY_DEFAULT

    def parse(self, ocr_text: str) -> Bill:
        """Parse OCR text into an unassigned bill with no people"""
        logger.debug("Starting receipt parsing (%d characters)", len(ocr_text))

        cleaned_text = self._deduplicate_by_line_similarity(ocr_text)
        lines = [line for line in cleaned_text.split('\n') if line.strip()]

        max_workers = max(1, min(8, (os.cpu_count() or 4)))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            items: List[BillItem] = [item for item in executor.map(self._extract_item_from_line, lines) if item]

        bill = Bill(
            items=items,
            tax=self._sum_amounts(TAX_PATTERN, cleaned_text),
            tip=self._sum_amounts(TIP_PATTERN, cleaned_text),
            total=self._find_total(cleaned_text),
            currency=self._detect_currency(cleaned_text),
        )

        if bill.items and bill.total is not None:
            if abs(bill.computed_total - bill.total) > TOTAL_MISMATCH_TOLERANCE:
                logger.warning("Total mismatch: calculated %s vs printed %s, "
                               "possible duplicate items or parsing errors",
                               bill.computed_total, bill.total)

        logger.debug("Parsed %d items, total %s %s", len(bill.items), bill.display_total, bill.currency)
        return bill
