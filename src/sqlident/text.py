from __future__ import annotations


def center_string(text: str, width: int) -> str:
    """Pad ``text`` with spaces to ``width``; an odd extra space goes on the right."""
    padding = width - len(text)
    if padding <= 0:
        return text
    left = padding // 2
    return " " * left + text + " " * (padding - left)
