"""Text layer: encoding policies, tokenizer, normaliser, line store."""

from pyfc.text.encoding import WIDE, EncodingPolicy, narrow, policy_for
from pyfc.text.models import EOF, EndOfFile, Entry, Line, entries_equal
from pyfc.text.normalizer import LineNormalizer, compress_whitespace, expand_tabs, line_hash
from pyfc.text.store import LineStore
from pyfc.text.tokenizer import LineTokenizer

__all__ = [
    "EOF",
    "WIDE",
    "EncodingPolicy",
    "EndOfFile",
    "Entry",
    "Line",
    "LineNormalizer",
    "LineStore",
    "LineTokenizer",
    "compress_whitespace",
    "entries_equal",
    "expand_tabs",
    "line_hash",
    "narrow",
    "policy_for",
]
