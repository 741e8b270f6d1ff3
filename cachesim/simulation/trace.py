"""Address trace parsing.

A trace is plain text with one access per line. Blank lines and `#`
comments are skipped. When a line has several fields (e.g. `R 0x1f`) the
last field is the address.
"""
import re
from typing import Iterable, Iterator, List

# plain ASCII digits only: no signs, underscores or other int() literal forms
DECIMAL_RE = re.compile(r'[0-9]+')
HEX_RE = re.compile(r'[0-9a-fA-F]+')


class TraceFormatError(ValueError):
    def __init__(self, message: str, line_no: int = 0):
        super().__init__(f"line {line_no}: {message}" if line_no else message)
        self.line_no = line_no


def parse_address(token: str) -> int:
    """Turn a trace token into an integer address.

    `0x` prefix or any hex letter means hex, anything else is decimal.
    """
    s = token.strip()
    if not s:
        raise TraceFormatError("empty address")
    if s.startswith('-'):
        raise TraceFormatError(f"negative address: {token!r}")
    if s.startswith('0x') or s.startswith('0X'):
        digits, base = s[2:], 16
    elif any(c in 'abcdefABCDEF' for c in s):
        digits, base = s, 16
    else:
        digits, base = s, 10
    pattern = HEX_RE if base == 16 else DECIMAL_RE
    if not pattern.fullmatch(digits):
        raise TraceFormatError(f"not an address: {token!r}")
    return int(digits, base)


def read_trace(lines: Iterable[str]) -> Iterator[int]:
    for line_no, line in enumerate(lines, start=1):
        line = line.split('#', 1)[0].strip()
        if not line:
            continue
        try:
            yield parse_address(line.split()[-1])
        except TraceFormatError as e:
            raise TraceFormatError(str(e), line_no) from None


def load_trace(path: str) -> List[int]:
    with open(path, 'r', encoding='utf-8') as fh:
        return list(read_trace(fh))
