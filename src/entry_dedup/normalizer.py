from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass

# ECMAScript WhiteSpace and LineTerminator characters, so keys stay compatible
# with stores written by the JavaScript tool. Unlike Python's \s this includes
# U+FEFF and excludes \x1c-\x1f and U+0085.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)
_whitespace = re.compile(f"[{re.escape(WHITESPACE)}]+")


@dataclass(slots=True, frozen=True)
class TransformedInput:
    original: str
    transformed: str
    hash: str


def normalize(text: str) -> str:
    """Canonical comparison key: whitespace runs collapsed, trimmed, lower-cased."""
    return _whitespace.sub(" ", text or "").strip(" ").lower()


def digest(normalized: str) -> str:
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def transform(text: str) -> TransformedInput:
    normalized = normalize(text)
    return TransformedInput(original=text, transformed=normalized, hash=digest(normalized))
