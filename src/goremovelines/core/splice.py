from dataclasses import dataclass

from goremovelines.core.boundary import decode_last_rune, decode_rune, find_real_end, find_real_start


@dataclass(frozen=True)
class BodySpan:
    """Offsets of a body's opening and closing delimiter in one buffer."""

    start: int
    end: int


def trim_leading(buffer: bytes, span: BodySpan, real_start: int) -> bytes | None:
    """Delete the blank line starting at ``real_start``, or return ``None`` if it is not blank."""
    i = real_start
    while True:
        rune, width = decode_rune(buffer, i, span.end)
        if rune == "\n":
            return buffer[:real_start] + buffer[i + width :]
        if not rune or not rune.isspace():
            return None
        i += width


def trim_trailing(buffer: bytes, span: BodySpan, real_end: int) -> bytes | None:
    """Delete the blank line ending at ``real_end``, or return ``None`` if it is not blank."""
    i = real_end
    while True:
        rune, width = decode_last_rune(buffer, span.start, i)
        if rune == "\n":
            return buffer[: i - width] + buffer[real_end:]
        if not rune or not rune.isspace():
            return None
        i -= width


def trim_body(buffer: bytes, span: BodySpan, opener: bytes = b"{", closer: bytes = b"}") -> bytes | None:
    """Remove one blank line touching either delimiter of ``span``.

    The leading edge wins when both edges are trimmable; the caller is
    expected to re-parse and come back for the other one.
    """
    real_start = find_real_start(buffer, span.start, span.end, opener)
    if real_start is not None:
        edited = trim_leading(buffer, span, real_start)
        if edited is not None:
            return edited

    real_end = find_real_end(buffer, span.start, span.end, closer)
    if real_end is not None:
        return trim_trailing(buffer, span, real_end)
    return None


def trim_case_body(buffer: bytes, span: BodySpan, is_last: bool) -> bytes | None:
    """Remove one blank line from a case clause running from its colon to ``span.end``.

    Only the last clause has a trailing edge; for the others ``span.end`` is
    the next clause's label and the gap before it is left alone.
    """
    real_start = find_real_start(buffer, span.start, span.end, b":")
    if real_start is not None:
        edited = trim_leading(buffer, span, real_start)
        if edited is not None:
            return edited

    if not is_last:
        return None

    real_end = find_real_end(buffer, span.start, span.end, b"}")
    if real_end is not None:
        return trim_trailing(buffer, span, real_end)
    return None
