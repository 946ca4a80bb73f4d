from __future__ import annotations

from .errors import MalformedMapError


B64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_B64_VALUES = {c: i for i, c in enumerate(B64_ALPHABET)}

# Each base64 digit carries 5 value bits; the 6th is the continuation flag.
_SHIFT = 5
_MASK = 0b11111
_CONTINUATION = 0b100000


def decode_vlq(text: str, *, start: int = 0, end: int | None = None) -> list[int]:
    """Decode the VLQ digits in `text[start:end]` into signed integers.

    Offsets in raised errors are relative to `text`, so callers can pass the
    whole `mappings` string and a slice range.
    """
    stop = len(text) if end is None else end
    values: list[int] = []
    acc = 0
    shift = 0
    i = start
    while i < stop:
        ch = text[i]
        digit = _B64_VALUES.get(ch)
        if digit is None:
            raise MalformedMapError(
                f"invalid base64 VLQ character {ch!r}",
                offset=i,
                hint="mappings may only contain A-Z, a-z, 0-9, '+', '/', ',' and ';'",
            )
        acc += (digit & _MASK) << shift
        if digit & _CONTINUATION:
            shift += _SHIFT
        else:
            # The low bit of the assembled value is the sign.
            value = acc >> 1
            values.append(-value if acc & 1 else value)
            acc = 0
            shift = 0
        i += 1
    if shift:
        raise MalformedMapError(
            "VLQ value ends with the continuation bit set",
            offset=stop - 1,
            hint="the mappings string is probably truncated",
        )
    return values


def encode_vlq(value: int) -> str:
    acc = (-value << 1) | 1 if value < 0 else value << 1
    out: list[str] = []
    while True:
        digit = acc & _MASK
        acc >>= _SHIFT
        if acc:
            digit |= _CONTINUATION
        out.append(B64_ALPHABET[digit])
        if not acc:
            return "".join(out)


def encode_vlq_values(values: list[int] | tuple[int, ...]) -> str:
    return "".join(encode_vlq(v) for v in values)
