from __future__ import annotations

import pytest

from sqlident.text import center_string


@pytest.mark.parametrize(
    "width, expected",
    [(-1, "abc"), (1, "abc"), (3, "abc"), (4, "abc "), (5, " abc "), (8, "  abc   ")],
)
def test_center_string(width, expected):
    assert center_string("abc", width) == expected


def test_center_string_large_width():
    # used to be quadratic in the width
    assert len(center_string("abc", 1234567)) == 1234567


def test_center_empty_text():
    assert center_string("", 4) == "    "
