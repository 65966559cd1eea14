# File: skyglow/core/numbers.py

"""
Locale-independent number parsing.

Python's float() accepts things a browser client never sends on purpose
("nan", "inf", "1_000"), so query parameters and SQM strings go through a
fixed decimal grammar instead.
"""

import math
import re
from typing import Optional

_DECIMAL_RE = re.compile(
    r"""
    ^\s*
    [+-]?
    (?:\d+(?:\.\d*)?|\.\d+)
    (?:[eE][+-]?\d+)?
    \s*$
    """,
    re.VERBOSE | re.ASCII,
)


def parse_invariant_float(text: Optional[str]) -> Optional[float]:
    """
    Parse `text` as a decimal number with "." as separator.

    Returns None for anything else (missing, empty, "48,2", "nan", ...)
    and for values that overflow a double.
    """
    if text is None or not _DECIMAL_RE.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value
