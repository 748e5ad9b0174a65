"""Tests for dotted version ordinals."""

import pytest

from presetkit.domain.versions import parse_version


class TestParseVersion:
    def test_two_components(self) -> None:
        assert parse_version("1.2") == (1 << 24) | (2 << 16)

    def test_four_components(self) -> None:
        assert parse_version("0.10.15.1") == (10 << 16) | (15 << 8) | 1

    @pytest.mark.parametrize("text", [None, "", "1", "abc", ".5"])
    def test_fewer_than_two_components_is_zero(self, text: str | None) -> None:
        assert parse_version(text) == 0

    def test_trailing_garbage_ignored(self) -> None:
        assert parse_version("1.2rc1") == parse_version("1.2")
        assert parse_version("1.2.x") == parse_version("1.2")

    def test_extra_components_ignored(self) -> None:
        assert parse_version("1.2.3.4.5") == parse_version("1.2.3.4")

    def test_components_truncated_to_eight_bits(self) -> None:
        assert parse_version("1.256") == parse_version("1.0")


class TestOrdering:
    def test_minor_beats_micro(self) -> None:
        assert parse_version("1.2") > parse_version("1.1.9")

    def test_numeric_not_lexical(self) -> None:
        assert parse_version("0.10.20") > parse_version("0.10.3")

    def test_missing_components_default_to_zero(self) -> None:
        assert parse_version("1.2") == parse_version("1.2.0.0")
