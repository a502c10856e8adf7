from __future__ import annotations

from typing import Optional

# ``None`` stands for an unquoted ``null`` literal.
Token = Optional[str]
CompoundIdentifier = list[Token]

QUOTE = '"'
SEPARATOR = "."
TERMINATOR = ";"
NULL_LITERAL = "NULL"


def _strip_line(line: str) -> str:
    stripped = line.strip()
    if stripped.endswith(TERMINATOR):
        stripped = stripped[:-1].rstrip()
    return stripped


def _unquoted_token(chars: list[str]) -> Token:
    text = "".join(chars).upper()
    if text == NULL_LITERAL:
        return None
    return text


def split_compound(line: str) -> list[CompoundIdentifier]:
    """
    Split a shell input line into compound identifiers.

    Unquoted whitespace separates identifiers and unquoted dots separate the
    parts of one identifier, so ``schema.tab "Mixed Case".col`` becomes
    ``[["SCHEMA", "TAB"], ["Mixed Case", "COL"]]``. Unquoted parts are
    uppercased and an unquoted ``null`` becomes ``None``; double-quoted parts
    keep their case and use ``""`` for a literal quote. Malformed input (a
    leading dot, a stray or unterminated quote) never raises.
    """
    text = _strip_line(line)
    result: list[CompoundIdentifier] = []
    parts: CompoundIdentifier = []
    chars: list[str] = []
    started = False
    in_quotes = False
    # whitespace seen since the last part, and no dot yet
    gap = False
    after_dot = False

    def flush() -> None:
        nonlocal chars, started
        if started:
            parts.append(_unquoted_token(chars))
        chars = []
        started = False

    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if in_quotes:
            if c != QUOTE:
                chars.append(c)
            elif i + 1 < n and text[i + 1] == QUOTE:
                chars.append(QUOTE)
                i += 1
            else:
                parts.append("".join(chars))
                chars = []
                started = False
                in_quotes = False
        elif c.isspace():
            flush()
            gap = True
        elif c == SEPARATOR:
            flush()
            gap = False
            after_dot = True
        else:
            if not started:
                if gap and not after_dot and parts:
                    result.append(parts)
                    parts = []
                gap = False
                after_dot = False
                started = True
                if c == QUOTE:
                    in_quotes = True
                    i += 1
                    continue
            chars.append(c)
        i += 1

    if in_quotes:
        parts.append("".join(chars))
    else:
        flush()
    if parts:
        result.append(parts)
    return result


__all__ = ["Token", "CompoundIdentifier", "split_compound"]
