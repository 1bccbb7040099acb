"""Hexadecimal dumps of byte strings, plus small rounding helpers."""

from __future__ import annotations

PER_LINE = 16


def round_down(x: int, step: int) -> int:
    """Return ``x`` rounded down to the nearest multiple of ``step``."""
    if x < 0 or step < 1:
        raise ValueError("round_down needs x >= 0 and step >= 1")
    return x // step * step


def div_round_up(x: int, step: int) -> int:
    """Return ``x`` divided by ``step``, rounded up."""
    if x < 0 or step < 1:
        raise ValueError("div_round_up needs x >= 0 and step >= 1")
    return (x + step - 1) // step


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte <= 0x7E else "."


def hex_dump(offset: int, data: bytes, ascii: bool = False) -> str:
    """Render ``data`` as hex bytes, 16 per line, numbered from ``offset``.

    When ``ascii`` is true the printable characters are shown alongside.
    Each line ends with a newline; empty data gives an empty string.
    """
    if offset < 0:
        raise ValueError("offset must be non-negative")
    data = bytes(data)
    lines = []
    pos = 0
    while pos < len(data):
        start = offset % PER_LINE
        end = min(PER_LINE, start + len(data) - pos)
        count = end - start
        chunk = data[pos:pos + count]

        parts = [f"{round_down(offset, PER_LINE):08x}  ", "   " * start]
        parts.extend(
            f"{byte:02x}{'-' if column == PER_LINE // 2 - 1 else ' '}"
            for column, byte in enumerate(chunk, start)
        )
        if ascii:
            parts.append("   " * (PER_LINE - end))
            parts.append("|")
            parts.append(" " * start)
            parts.extend(_printable(byte) for byte in chunk)
            parts.append(" " * (PER_LINE - end))
            parts.append("|")
        lines.append("".join(parts) + "\n")

        offset += count
        pos += count
    return "".join(lines)