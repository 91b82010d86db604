from __future__ import annotations

import pytest

from models import Rect, SpannableString, round_half_up, union_of_rects
from strings import get_string


def test_round_half_up() -> None:
    assert round_half_up(12.5) == 13
    assert round_half_up(13.5) == 14
    assert round_half_up(12.49) == 12
    assert round_half_up(-0.5) == 0


def test_rect_geometry() -> None:
    outer = Rect(0, 0, 100, 100)
    inner = Rect(10, 10, 20, 20)
    touching = Rect(100, 0, 150, 50)

    assert outer.contains(inner)
    assert not inner.contains(outer)
    assert not Rect.EMPTY.contains(Rect.EMPTY)
    assert outer.intersects(inner)
    assert not outer.intersects(touching)
    assert inner.to_short_string() == "[10,10][20,20]"
    assert (inner.width, inner.height, inner.area) == (10, 10, 100)


def test_union_of_rects() -> None:
    assert union_of_rects([]) == Rect.EMPTY
    assert union_of_rects([Rect(0, 5, 10, 10), Rect(5, 0, 20, 8)]) == Rect(0, 0, 20, 10)


def test_spannable_string() -> None:
    assert SpannableString.of(None) is None
    text = SpannableString.of("  hi ")
    assert str(text) == "  hi "
    assert text.strip() == "hi"
    assert not SpannableString("")
    assert SpannableString.of(text) is text


def test_message_catalog_falls_back_to_english() -> None:
    assert get_string("fr_FR", "value_checked") == get_string("en_US", "value_checked")
    with pytest.raises(KeyError):
        get_string("en_US", "no_such_message")
