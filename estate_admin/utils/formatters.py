"""
Formatting and normalization helpers shared by forms, services and the CLI.
"""
import math
import re
import time
from typing import Any, Optional, Union
from urllib.parse import unquote


CRORE = 10_000_000
LAKH = 100_000

_MAP_SRC_RE = re.compile(r'src="([^"]+)"')
_TIMESTAMP_PREFIX_RE = re.compile(r'^\d+-')


def _trim_decimal(value: float) -> str:
    # one decimal place unless the value is whole
    return f"{value:.0f}" if value % 1 == 0 else f"{value:.1f}"


def format_price_in_lakhs_crores(price: Any) -> str:
    """
    Format a price the way Indian listings show it.

    5000000 -> "₹ 50 L", 15000000 -> "₹ 1.5 Cr", 12500 -> "₹12,500".
    Missing or non-numeric prices give "N/A".
    """
    if price is None or isinstance(price, bool):
        return 'N/A'
    try:
        price = float(price)
    except (TypeError, ValueError):
        return 'N/A'
    if math.isnan(price) or math.isinf(price):
        return 'N/A'

    if price >= CRORE:
        return f"₹ {_trim_decimal(price / CRORE)} Cr"
    if price >= LAKH:
        return f"₹ {_trim_decimal(price / LAKH)} L"

    rounded = int(math.floor(abs(price) + 0.5))
    sign = '-' if price < 0 and rounded else ''
    return f"{sign}₹{rounded:,}"


def parse_number(value: Any) -> Optional[Union[int, float]]:
    """
    Coerce a form value to a number.

    Numbers pass through; numeric text becomes int/float; anything else
    (blank, non-numeric, nan/inf) becomes None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number) if number.is_integer() else number


_TRUE_WORDS = ('true', '1', 'yes')
_FALSE_WORDS = ('false', '0', 'no')


def parse_bool(value: Any) -> Optional[bool]:
    """
    Read a checkbox value.

    Real bools pass through; 1/0 and the words true/false, yes/no (any
    case) are mapped; anything else gives None.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return None


def slugify_detail_key(key: str) -> str:
    """' Facing Direction ' -> 'facing_direction'"""
    return re.sub(r'\s+', '_', (key or '').strip()).lower()


def extract_map_embed_src(value: str) -> str:
    """Pull the src URL out of a pasted <iframe> snippet"""
    value = value or ''
    match = _MAP_SRC_RE.search(value)
    return match.group(1) if match else value.strip()


def upload_object_path(prefix: str, filename: str, now_ms: int = None) -> str:
    """Storage path for a new upload: <prefix>/<epoch ms>-<name without whitespace>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    safe_name = re.sub(r'\s', '_', filename or 'file')
    return f"{prefix}/{now_ms}-{safe_name}"


def storage_path_from_url(url: str, bucket: str) -> Optional[str]:
    """Object path inside ``bucket`` for one of its public URLs"""
    if not url:
        return None
    marker = f"/{bucket}/"
    index = url.rfind(marker)
    if index == -1:
        return None
    path = url[index + len(marker):].split('?', 1)[0]
    return unquote(path) or None


def file_name_from_url(url: str) -> str:
    """Original file name of an uploaded object (timestamp prefix removed)"""
    if not url:
        return ''
    name = unquote(url).rstrip('/').rsplit('/', 1)[-1]
    return _TIMESTAMP_PREFIX_RE.sub('', name, count=1)
