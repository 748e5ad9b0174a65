"""Tests for layer reconciliation (rebase vs. user-wins)."""

from presetkit.domain.document import Document, Group
from presetkit.domain.keyfile import parse_keyfile
from presetkit.domain.merge import Layer, merge_layers, overlay


def _layer(text: str) -> Layer:
    doc = parse_keyfile(text)
    return Layer(document=doc, version=doc.version)


SYSTEM_12 = (
    "# shipped\n\n"
    "[_presets_]\nelement-name=GstSimSyn\nversion=1.2\n\n"
    "[A]\nx=system\ny=only-in-system\n\n"
    "[B]\nwave=saw\n"
)
USER_11 = (
    "[_presets_]\nelement-name=GstSimSyn\nversion=1.1\n\n"
    "# mine\n[A]\n# edited\nx=user\n\n"
    "[_scratch]\ntmp=1\n\n"
    "[C]\nwave=square\n"
)


class TestMergeLayers:
    def test_neither_layer_gives_fresh_document(self) -> None:
        doc, resave = merge_layers("GstSimSyn", None, None)
        assert resave is False
        assert doc.element_name == "GstSimSyn"
        assert doc.version is None
        assert doc.preset_names() == []

    def test_system_only_is_used_verbatim(self) -> None:
        system = _layer(SYSTEM_12)
        doc, resave = merge_layers("GstSimSyn", system, None)
        assert doc is system.document
        assert resave is False

    def test_user_only_is_used_verbatim(self) -> None:
        user = _layer(USER_11)
        doc, resave = merge_layers("GstSimSyn", None, user)
        assert doc is user.document
        assert resave is False

    def test_newer_system_rebases_user_groups(self) -> None:
        doc, resave = merge_layers("GstSimSyn", _layer(SYSTEM_12), _layer(USER_11))
        assert resave is True
        # user group replaces the system group as a whole
        assert doc.groups["A"].entries == {"x": "user"}
        assert doc.groups["A"].comment == " mine"
        assert doc.groups["A"].key_comments == {"x": " edited"}
        assert doc.get_value("B", "wave") == "saw"
        assert doc.get_value("C", "wave") == "square"
        assert doc.preset_names() == ["A", "B", "C"]
        # private user groups are not carried over, system header stays
        assert not doc.has_group("_scratch")
        assert doc.version == "1.2"

    def test_newer_user_discards_system(self) -> None:
        system = _layer(SYSTEM_12.replace("version=1.2", "version=1.1"))
        user = _layer(USER_11.replace("version=1.1", "version=1.2"))
        doc, resave = merge_layers("GstSimSyn", system, user)
        assert resave is False
        assert doc is user.document
        assert not doc.has_group("B")

    def test_equal_versions_keep_user(self) -> None:
        system = _layer(SYSTEM_12)
        user = _layer(USER_11.replace("version=1.1", "version=1.2"))
        doc, resave = merge_layers("GstSimSyn", system, user)
        assert doc is user.document
        assert resave is False

    def test_unversioned_user_is_oldest(self) -> None:
        user = _layer("[_presets_]\nelement-name=GstSimSyn\n\n[A]\nx=user\n")
        doc, resave = merge_layers("GstSimSyn", _layer(SYSTEM_12), user)
        assert resave is True
        assert doc.get_value("A", "x") == "user"


class TestOverlay:
    def test_copies_file_comment(self) -> None:
        target = Document(comment="old")
        overlay(target, Document(comment="new"))
        assert target.comment == "new"

    def test_keeps_target_comment_when_source_has_none(self) -> None:
        target = Document(comment="old")
        overlay(target, Document())
        assert target.comment == "old"

    def test_overlaid_group_is_a_copy(self) -> None:
        source = Document(groups={"A": Group(entries={"x": "1"})})
        target = Document()
        overlay(target, source)
        source.set_value("A", "x", "2")
        assert target.get_value("A", "x") == "1"
