"""Tests for property specs, the presettable filter and ScalarCodec."""

import enum

import pytest

from presetkit.domain.errors import CodecError
from presetkit.domain.properties import (
    PropertyProvider,
    PropertySpec,
    ScalarCodec,
    presettable_properties,
)


class Wave(enum.Enum):
    SINE = 0
    SAW = 1


class TestPropertySpec:
    def test_default_is_presettable(self) -> None:
        assert PropertySpec("wave").presettable

    @pytest.mark.parametrize(
        "spec",
        [
            PropertySpec("a", readable=False),
            PropertySpec("b", writable=False),
            PropertySpec("c", construction_only=True),
        ],
    )
    def test_not_presettable(self, spec: PropertySpec) -> None:
        assert not spec.presettable


class TestPresettableProperties:
    def test_filters_and_keeps_order(self, synth: PropertyProvider) -> None:
        names = [spec.name for spec in presettable_properties(synth)]
        assert names == ["wave", "volume", "voices", "mute"]

    def test_fake_provider_satisfies_protocol(self, synth: object) -> None:
        assert isinstance(synth, PropertyProvider)


class TestScalarCodec:
    codec = ScalarCodec()

    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (True, "true"),
            (False, "false"),
            (4, "4"),
            (0.1, "0.1"),
            ("saw", "saw"),
            (Wave.SAW, "SAW"),
        ],
    )
    def test_encode(self, value: object, text: str) -> None:
        assert self.codec.encode(value) == text

    @pytest.mark.parametrize(
        ("text", "expected_type", "value"),
        [
            ("true", bool, True),
            ("Off", bool, False),
            ("4", int, 4),
            ("0.25", float, 0.25),
            ("saw", str, "saw"),
            ("SINE", Wave, Wave.SINE),
        ],
    )
    def test_decode(self, text: str, expected_type: type, value: object) -> None:
        assert self.codec.decode(text, expected_type) == value

    def test_encode_unsupported_type(self) -> None:
        with pytest.raises(CodecError):
            self.codec.encode(object())

    @pytest.mark.parametrize(
        ("text", "expected_type"),
        [("maybe", bool), ("loud", float), ("4.5", int), ("TRIANGLE", Wave), ("x", list)],
    )
    def test_decode_failures(self, text: str, expected_type: type) -> None:
        with pytest.raises(CodecError):
            self.codec.decode(text, expected_type)
