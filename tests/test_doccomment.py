"""
Tests for DocCommentParser

Covers the @docs split, symbol resolution order, trailing prose,
the unresolved-name policies, and the comma-splitting quirk.
"""

import logging

import pytest

from pkgdocs.core.doccomment import DocCommentParser, UnresolvedPolicy
from pkgdocs.core.symbols import NodeKind, ProseNode, UnresolvedNode
from pkgdocs.errors import UnresolvedSymbolError
from tests.factories import alias, binop, fake_render, module_info, union, value


def kinds(nodes):
    return [node.kind for node in nodes]


def names(nodes):
    return [getattr(node, "name", None) for node in nodes]


# =============================================================================
# Basic structure
# =============================================================================

class TestParseStructure:
    """Prose and symbol nodes come out in authoring order."""

    def test_intro_symbols_and_prose(self):
        """The canonical two-directive example."""
        module = module_info(
            comment="Intro text.\n@docs foo\nMore text.\n@docs bar, baz",
            values=[value("foo", "Foo doc."), value("bar", "Bar doc."), value("baz", "Baz doc.")],
        )
        nodes = DocCommentParser(fake_render).parse(module)

        assert kinds(nodes) == [
            NodeKind.PROSE, NodeKind.VALUE, NodeKind.PROSE, NodeKind.VALUE, NodeKind.VALUE
        ]
        assert nodes[0].markup == "<md>Intro text.</md>"
        assert nodes[1].name == "foo"
        assert nodes[1].comment == "<md>Foo doc.</md>"
        assert nodes[2].markup == "<md>More text.</md>"
        assert names(nodes[3:]) == ["bar", "baz"]

    def test_no_directive_gives_single_prose(self):
        module = module_info(comment="Just prose.\nTwo lines.")
        nodes = DocCommentParser(fake_render).parse(module)
        assert nodes == [ProseNode(markup="<md>Just prose.\nTwo lines.</md>", text="Just prose.\nTwo lines.")]

    def test_empty_intro_still_emitted(self):
        """The intro node is always present, even when empty."""
        module = module_info(comment="\n@docs foo", values=[value("foo")])
        nodes = DocCommentParser(fake_render).parse(module)
        assert kinds(nodes) == [NodeKind.PROSE, NodeKind.VALUE]
        assert nodes[0].text == ""

    def test_directive_at_start_without_newline_is_prose(self):
        """Only "\\n@docs" is a delimiter."""
        module = module_info(comment="@docs foo", values=[value("foo")])
        nodes = DocCommentParser(fake_render).parse(module)
        assert kinds(nodes) == [NodeKind.PROSE]

    def test_empty_sub_blocks_ignored(self):
        """Doubled or trailing commas produce nothing."""
        module = module_info(
            comment="Intro\n@docs foo,, bar,  ",
            values=[value("foo"), value("bar")],
        )
        nodes = DocCommentParser(fake_render).parse(module)
        assert names(nodes[1:]) == ["foo", "bar"]

    def test_name_is_first_word_only(self):
        """Whitespace around the name is trimmed."""
        module = module_info(comment="\n@docs   foo  ", values=[value("foo")])
        nodes = DocCommentParser(fake_render).parse(module)
        assert names(nodes) == [None, "foo"]
        assert len(nodes) == 2


# =============================================================================
# Resolution
# =============================================================================

class TestResolution:
    """Names resolve across all four tables."""

    def test_every_kind(self):
        module = module_info(
            comment="\n@docs v, |>, Tree, Point",
            values=[value("v", type="Int")],
            binops=[binop("|>")],
            unions=[union("Tree", args=["a"], tags=[["Leaf", []]])],
            aliases=[alias("Point", type="{ x : Float }")],
        )
        nodes = DocCommentParser(fake_render).parse(module)
        assert kinds(nodes[1:]) == [NodeKind.VALUE, NodeKind.BINOP, NodeKind.UNION, NodeKind.ALIAS]

    def test_values_take_precedence(self):
        """A name present in several tables resolves to the value."""
        module = module_info(
            comment="\n@docs Thing",
            values=[value("Thing", "from values")],
            unions=[union("Thing", "from unions")],
        )
        nodes = DocCommentParser(fake_render).parse(module)
        assert nodes[1].kind == NodeKind.VALUE
        assert nodes[1].comment == "<md>from values</md>"

    def test_case_sensitive(self):
        module = module_info(comment="\n@docs Foo", values=[value("foo")])
        nodes = DocCommentParser(fake_render).parse(module)
        assert kinds(nodes) == [NodeKind.PROSE]


# =============================================================================
# Trailing prose and the comma quirk
# =============================================================================

class TestTrailingProse:
    """Text after a name in the same sub-block becomes prose."""

    def test_prose_after_last_name(self):
        module = module_info(
            comment="\n@docs foo\n\n# Next Section\nDetails here.",
            values=[value("foo")],
        )
        nodes = DocCommentParser(fake_render).parse(module)
        assert kinds(nodes) == [NodeKind.PROSE, NodeKind.VALUE, NodeKind.PROSE]
        assert nodes[2].text == "# Next Section\nDetails here."

    def test_comma_splits_prose(self):
        """A comma in trailing prose starts a new sub-block."""
        module = module_info(
            comment="\n@docs foo\nUse it, carefully.",
            values=[value("foo"), value("carefully.")],
        )
        nodes = DocCommentParser(fake_render).parse(module)
        assert kinds(nodes) == [NodeKind.PROSE, NodeKind.VALUE, NodeKind.PROSE, NodeKind.VALUE]
        assert nodes[2].text == "Use it"
        assert nodes[3].name == "carefully."

    def test_prose_kept_when_name_dropped(self):
        module = module_info(comment="\n@docs missing\nStill here.")
        nodes = DocCommentParser(fake_render).parse(module)
        assert kinds(nodes) == [NodeKind.PROSE, NodeKind.PROSE]
        assert nodes[1].text == "Still here."


# =============================================================================
# Unresolved policies
# =============================================================================

class TestUnresolvedPolicy:
    """Names matching no symbol."""

    COMMENT = "Intro\n@docs known, ghost"

    def _module(self):
        return module_info(name="Haunted", comment=self.COMMENT, values=[value("known")])

    def test_drop_is_default(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pkgdocs.core.doccomment"):
            nodes = DocCommentParser(fake_render).parse(self._module())
        assert names(nodes) == [None, "known"]
        assert "ghost" in caplog.text

    def test_placeholder(self, caplog):
        parser = DocCommentParser(fake_render, unresolved=UnresolvedPolicy.PLACEHOLDER)
        with caplog.at_level(logging.WARNING, logger="pkgdocs.core.doccomment"):
            nodes = parser.parse(self._module())
        assert nodes[-1] == UnresolvedNode(name="ghost")
        assert nodes[-1].to_dict() == {"kind": "unresolved", "name": "ghost"}
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_error(self):
        parser = DocCommentParser(fake_render, unresolved=UnresolvedPolicy.ERROR)
        with pytest.raises(UnresolvedSymbolError) as exc:
            parser.parse(self._module())
        assert exc.value.module == "Haunted"
        assert exc.value.name == "ghost"

    def test_policy_from_string(self):
        parser = DocCommentParser(fake_render, unresolved="placeholder")
        assert parser.unresolved == UnresolvedPolicy.PLACEHOLDER


class TestDeterminism:
    """Parsing holds no state between calls."""

    def test_same_input_same_output(self):
        module = module_info(comment="A\n@docs x, y\nB", values=[value("x"), value("y")])
        parser = DocCommentParser(fake_render)
        assert parser.parse(module) == parser.parse(module)
