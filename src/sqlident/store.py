from __future__ import annotations

import os
from typing import Iterable, Iterator, Mapping

_DECODE = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ENCODE = {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}
_SEPARATORS = "=:"


def _escape(text: str, is_key: bool) -> str:
    out = []
    for i, c in enumerate(text):
        if c == "\\":
            out.append("\\\\")
        elif c in _ENCODE:
            out.append("\\" + _ENCODE[c])
        elif c in "=:#!" or (c == " " and (is_key or i == 0)):
            out.append("\\" + c)
        else:
            out.append(c)
    return "".join(out)


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    out = []
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c != "\\" or i + 1 == n:
            out.append(c)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u":
            digits = text[i + 2 : i + 6]
            if len(digits) != 4:
                raise ValueError(f"Malformed \\uxxxx encoding in {text!r}")
            out.append(chr(int(digits, 16)))
            i += 6
            continue
        out.append(_DECODE.get(nxt, nxt))
        i += 2
    return "".join(out)


def _logical_lines(lines: Iterable[str]) -> Iterator[str]:
    # an odd run of trailing backslashes continues the entry on the next line
    pending: str | None = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        if pending is None:
            line = line.lstrip()
            if not line or line[0] in "#!":
                continue
        else:
            line = pending + line.lstrip()
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2:
            pending = line[:-1]
            continue
        pending = None
        yield line
    if pending is not None:
        yield pending


def _split_entry(line: str) -> tuple[str, str]:
    i = 0
    n = len(line)
    while i < n:
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c.isspace():
            break
        i += 1
    rest = line[i:].lstrip()
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip()
    return _unescape(line[:i]), _unescape(rest)


def write_properties(
    path: str | os.PathLike, props: Mapping[str, str], comment: str | None = None
):
    directory = os.path.dirname(os.fspath(path))
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if comment:
            f.write(f"# {comment}\n")
        for key in sorted(props):
            f.write(f"{_escape(key, True)}={_escape(props[key], False)}\n")


def read_properties(path: str | os.PathLike) -> dict[str, str]:
    """
    Read a Java-style ``.properties`` file, including files written by the
    original shell: ``#``/``!`` comments, ``=``/``:``/whitespace separators,
    backslash escapes (``\\:``, ``\\\\``, ``\\t``, ``\\uXXXX``) and
    trailing-backslash continuation lines. Decoded as UTF-8.
    """
    with open(path, "r", encoding="utf-8") as f:
        return dict(_split_entry(line) for line in _logical_lines(f))
