PATTERNS = {
        'qty_suffix': r'^(.+?)\s*[xX×](\d+)\s+\$?([\d,\.]+)\s*(?:\$|USD|€|EUR|£|GBP)?\s*$',
        'qty_unit_total': r'^(.+?)\s+(\d+)\s*[xX×]\s*\$?([\d,\.]+)\s+\$?([\d,\.]+)\s*$',
        'leading_qty': r'^(\d+)\s+(.+?)\s+\$?([\d,\.]+)\s*(?:\$|USD|€|EUR|£|GBP)?\s*$',
        'dash_item': r'^(.+?)\s*[-–]\s*\$?([\d,\.]+)\s*(?:\$|USD|€|EUR|£|GBP)?\s*$',
        'simple_item': r'^(.+?)\s+\$?([\d,\.]+)\s*(?:\$|USD|€|EUR|£|GBP)?\s*$',
    }

TOTAL_SUM_PATTERNS = [
    r'^\s*(?:GRAND\s+TOTAL|TOTAL\s+DUE|AMOUNT\s+DUE|TOTAL)\b[:\s]*\$?([\d,\.]+)',
]

CURRENCY_INDICATORS = {
    'USD': r'\$|USD',
    'EUR': r'€|EUR',
    'GBP': r'£|GBP',
}

# Words to skip
SKIP_WORDS = [
    'total', 'subtotal', 'sub total', 'tax', 'vat', 'gst', 'tip', 'gratuity',
    'service charge', 'cash', 'change', 'card', 'visa', 'mastercard', 'amex',
    'receipt', 'invoice', 'date', 'time', 'cashier', 'server', 'table',
    'thank', 'balance', 'amount due', 'guests',
]
