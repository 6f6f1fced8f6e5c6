"""Locate the blank-line edges just inside a delimited body.

All offsets are byte offsets into a UTF-8 buffer. Scanning steps one code
point at a time so multi-byte characters are never split.
"""

_NEWLINE = "\n"
_REPLACEMENT = "\ufffd"


def _sequence_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 1


def decode_rune(buffer: bytes, index: int, limit: int) -> tuple[str, int]:
    """Decode the code point starting at ``index``, not reading past ``limit``.

    Returns ``("", 0)`` when there is nothing left to read. Malformed bytes
    decode as a single replacement character of width 1.
    """
    if index >= limit:
        return "", 0
    width = min(_sequence_length(buffer[index]), limit - index)
    try:
        return buffer[index : index + width].decode("utf-8"), width
    except UnicodeDecodeError:
        return _REPLACEMENT, 1


def decode_last_rune(buffer: bytes, floor: int, index: int) -> tuple[str, int]:
    """Decode the code point ending just before ``index``, not reading below ``floor``."""
    if index <= floor:
        return "", 0
    start = index - 1
    # step back over at most three continuation bytes
    while start > floor and index - start < 4 and buffer[start] & 0xC0 == 0x80:
        start -= 1
    try:
        return buffer[start:index].decode("utf-8"), index - start
    except UnicodeDecodeError:
        return _REPLACEMENT, 1


def _valid_span(buffer: bytes, start: int, end: int) -> bool:
    return 0 <= start < end < len(buffer)


def find_real_start(buffer: bytes, start: int, end: int, opener: bytes = b"{") -> int | None:
    """Offset of the first line fully inside the body opened at ``start``.

    ``None`` when the span is degenerate, ``start`` is not ``opener`` or
    anything but whitespace follows the opener on its line.
    """
    if not _valid_span(buffer, start, end) or buffer[start : start + len(opener)] != opener:
        return None

    i = start + len(opener)
    while True:
        rune, width = decode_rune(buffer, i, end)
        if rune == _NEWLINE:
            return i + width
        if not rune or not rune.isspace():
            return None
        i += width


def find_real_end(buffer: bytes, start: int, end: int, closer: bytes = b"}") -> int | None:
    """Offset of the newline ending the last line fully inside the body closed at ``end``.

    ``None`` when the span is degenerate, ``end`` is not ``closer`` or
    anything but whitespace precedes the closer on its line.
    """
    if not _valid_span(buffer, start, end) or buffer[end : end + len(closer)] != closer:
        return None

    i = end
    while True:
        rune, width = decode_last_rune(buffer, start, i)
        if rune == _NEWLINE:
            return i - width
        if not rune or not rune.isspace():
            return None
        i -= width
