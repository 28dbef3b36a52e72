from __future__ import annotations

import pytest

from moar_cli.ansi import DEFAULT_THEME, PLAIN_THEME, LineBuilder
from moar_cli.package.models import Mergeability, sign_glyph, tag_glyph


def test_push_text_and_arrow() -> None:
    builder = LineBuilder().push_text("name").push_arrow_line(3).push_text("next")
    assert builder.content == "name ━━━> next"


def test_counter_hidden_when_zero() -> None:
    builder = LineBuilder().push_text("x").push_counter("▲", 0).push_counter("▼", 2)
    assert builder.content == "x ▼2"


def test_counter_forced_without_pad() -> None:
    builder = LineBuilder().push_counter("ᚮ", 0, force=True, no_pad=True)
    assert builder.content == "ᚮ0"


def test_styles_do_not_change_content() -> None:
    styled = LineBuilder().push_text("develop", DEFAULT_THEME.emphasis).push_counter("▲", 4, DEFAULT_THEME.ahead)
    plain = LineBuilder().push_text("develop", PLAIN_THEME.emphasis).push_counter("▲", 4, PLAIN_THEME.ahead)
    assert styled.content == plain.content == "develop ▲4"
    assert styled.text.spans
    assert not plain.text.spans
    assert len(styled) == len("develop ▲4")


@pytest.mark.parametrize(("good", "glyph"), [(True, "●"), (False, "◑"), (None, "◌")])
def test_sign_glyph(good: bool | None, glyph: str) -> None:
    assert sign_glyph(good) == glyph


def test_mergeability_tags() -> None:
    assert Mergeability.CONFLICT.filter_tag == "#CONFLICT"
    assert Mergeability.ALREADY_MERGED.filter_tag == "#CONFLICT"
    assert Mergeability.CLEAN.filter_tag == "#MERGE-READY"
    assert Mergeability.NEEDS_REVIEW.filter_tag == "#MERGEABLE"
    assert Mergeability.NOT_EVALUATED.glyph == ""


@pytest.mark.parametrize(("good", "glyph"), [(True, "●"), (False, "○"), (None, "◌")])
def test_tag_glyph(good: bool | None, glyph: str) -> None:
    assert tag_glyph(good) == glyph


def test_bad_tag_and_bad_signature_differ() -> None:
    assert tag_glyph(False) != sign_glyph(False)
