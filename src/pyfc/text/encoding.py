"""Text encoding policies: code-unit width, terminators, and codec."""

from __future__ import annotations

import codecs
import re
from dataclasses import dataclass, field

ESCAPE_BASE = 0xDC00


@dataclass(frozen=True)
class EncodingPolicy:
    """How raw bytes map to text for one file encoding.

    ``unit`` is the code-unit width in bytes. A line ends at a newline or a
    NUL code unit, and terminators are only recognised at offsets that are a
    multiple of ``unit``.
    """

    name: str
    codec: str
    unit: int
    newline: bytes
    carriage_return: bytes
    errors: str = "surrogateescape"
    _terminators: "re.Pattern[bytes]" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        nul = b"\x00" * self.unit
        pattern = re.compile(re.escape(self.newline) + b"|" + re.escape(nul))
        object.__setattr__(self, "_terminators", pattern)

    def decode(self, data: bytes) -> str:
        """Decode one line. Never raises for wide or UTF-8 text.

        Distinct byte sequences stay distinct: undecodable bytes become lone
        surrogates, and a trailing partial code unit becomes one escaped
        character per byte.
        """
        tail = len(data) % self.unit
        if not tail:
            return data.decode(self.codec, errors=self.errors)
        text = data[:-tail].decode(self.codec, errors=self.errors)
        return text + "".join(chr(ESCAPE_BASE + b) for b in data[-tail:])

    def find_terminator(self, data: bytes | bytearray, start: int = 0) -> int:
        """Return the offset of the next aligned terminator at or after *start*, or -1."""
        match = self._terminators.search(data, start)
        while match is not None and match.start() % self.unit:
            match = self._terminators.search(data, match.start() + 1)
        return -1 if match is None else match.start()

    def align(self, size: int) -> int:
        """Round *size* down to a whole number of code units (at least one)."""
        return max(size - size % self.unit, self.unit)


def _encode_after_first(codec: str, text: str) -> bytes:
    # a BOM, if the codec writes one, goes out with the first character
    encoder = codecs.getincrementalencoder(codec)()
    encoder.encode("x")
    return encoder.encode(text)


def narrow(codec: str = "utf-8") -> EncodingPolicy:
    """Single-byte-unit policy for *codec* (UTF-8, Latin-1, cp1252, ...).

    Raises LookupError for an unknown codec and ValueError for one whose line
    terminators are not the single ASCII bytes, such as UTF-16 or UTF-32.
    """
    info = codecs.lookup(codec)
    try:
        terminators = [_encode_after_first(info.name, ch) for ch in ("\n", "\r", "\x00")]
    except (LookupError, UnicodeError, TypeError) as exc:
        raise ValueError(f"{codec} is not a text encoding") from exc
    if terminators != [b"\n", b"\r", b"\x00"]:
        raise ValueError(f"{codec} does not encode line breaks as single bytes")
    return EncodingPolicy(
        name=info.name,
        codec=info.name,
        unit=1,
        newline=b"\n",
        carriage_return=b"\r",
    )


WIDE = EncodingPolicy(
    name="utf-16-le",
    codec="utf-16-le",
    unit=2,
    newline=b"\n\x00",
    carriage_return=b"\r\x00",
    errors="surrogatepass",
)


def policy_for(wide_text: bool, codec: str = "utf-8") -> EncodingPolicy:
    return WIDE if wide_text else narrow(codec)
