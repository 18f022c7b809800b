"""
Tests for identifier parsing and alias building.

This test suite covers:
1. Unscoped, scoped, versioned and sub-path identifiers
2. Version divider placement around scopes and sub-paths
3. Rejection of empty, non-string and malformed identifiers
4. Alias determinism and path safety
"""

import pytest

from pyuse.alias import build_alias, module_name_for
from pyuse.errors import ParseError
from pyuse.specifier import LATEST, ParsedSpecifier, parse


class TestParse:
    """Test identifier parsing."""

    def test_name_only(self):
        """Should default version to latest and sub-path to empty."""
        assert parse("lodash") == ParsedSpecifier("lodash", LATEST, "")

    def test_name_and_version(self):
        """Should split name and version at the divider."""
        spec = parse("lodash@4.17.21")
        assert spec.name == "lodash"
        assert spec.version == "4.17.21"
        assert spec.sub_path == ""

    def test_scoped_name_and_version(self):
        """Should not mistake the scope marker for a version divider."""
        spec = parse("@konard/use@1.0.0")
        assert spec.name == "@konard/use"
        assert spec.version == "1.0.0"
        assert spec.sub_path == ""

    def test_scoped_name_without_version(self):
        """Should treat a bare scoped name as latest."""
        spec = parse("@konard/use")
        assert spec.name == "@konard/use"
        assert spec.version == LATEST

    def test_scoped_with_sub_path(self):
        """Should keep the leading slash on the sub-path."""
        spec = parse("@scope/pkg@1.0.0/lib/index")
        assert spec.name == "@scope/pkg"
        assert spec.version == "1.0.0"
        assert spec.sub_path == "/lib/index"

    def test_sub_path_without_version(self):
        """Should accept a sub-path on an unversioned name."""
        spec = parse("lodash/fp")
        assert spec.name == "lodash"
        assert spec.version == LATEST
        assert spec.sub_path == "/fp"

    def test_at_sign_inside_sub_path(self):
        """An @ after the first slash following the name belongs to the sub-path."""
        spec = parse("pkg@1.0.0/sub/@scope/x")
        assert spec.name == "pkg"
        assert spec.version == "1.0.0"
        assert spec.sub_path == "/sub/@scope/x"

        spec = parse("pkg/sub@2.0.0")
        assert spec.name == "pkg"
        assert spec.version == LATEST
        assert spec.sub_path == "/sub@2.0.0"

    def test_trailing_slash_dropped(self):
        """Should not keep an empty sub-path segment."""
        assert parse("lodash@4.17.21/").sub_path == ""

    def test_operator_version(self):
        """Should accept pip-style version specifiers as the version token."""
        assert parse("requests@>=2.31").version == ">=2.31"

    def test_pinned(self):
        """Only the latest marker is unpinned."""
        assert parse("lodash@4.17.21").pinned
        assert not parse("lodash").pinned
        assert not parse("lodash@latest").pinned

    def test_deterministic(self):
        """Should parse the same identifier to equal results."""
        assert parse("@scope/pkg@1.0.0/x") == parse("@scope/pkg@1.0.0/x")

    @pytest.mark.parametrize("identifier", ["", "   ", None, 42, ["lodash"]])
    def test_empty_or_not_a_string(self, identifier):
        """Should reject empty and non-string input with example forms."""
        with pytest.raises(ParseError, match="lodash@4.17.21") as exc_info:
            parse(identifier)
        assert "@konard/use@1.0.0" in str(exc_info.value)

    @pytest.mark.parametrize(
        "identifier",
        ["@", "@scope", "@scope/", "lodash@", "pkg@1@2", "@/pkg", "lo dash", "/lib"],
    )
    def test_malformed(self, identifier):
        """Should reject identifiers with no extractable name or version."""
        with pytest.raises(ParseError, match="Failed to parse package identifier"):
            parse(identifier)


class TestAlias:
    """Test alias building."""

    def test_unscoped(self):
        assert build_alias("lodash", "4.17.21") == "lodash-v4.17.21"

    def test_scoped(self):
        """Should drop the scope marker and join scope and name with a dash."""
        assert build_alias("@konard/use", "1.0.0") == "konard-use-v1.0.0"
        assert build_alias("@scope/pkg", "1.0.0") == "scope-pkg-v1.0.0"

    def test_latest(self):
        assert build_alias("lodash", LATEST) == "lodash-vlatest"

    def test_deterministic(self):
        """Same inputs should give the same alias."""
        assert build_alias("@scope/pkg", "1.0.0") == build_alias("@scope/pkg", "1.0.0")

    def test_versions_do_not_collide(self):
        """Different versions of one package should get different aliases."""
        assert build_alias("pkg", "1.0.0") != build_alias("pkg", "2.0.0")

    @pytest.mark.parametrize(
        "identifier",
        ["lodash", "lodash@4.17.21", "@scope/pkg@1.0.0/lib", "@a/b@>=1.0"],
    )
    def test_path_safe(self, identifier):
        """Aliases built from parsed identifiers should be single path segments."""
        spec = parse(identifier)
        alias = build_alias(spec.name, spec.version)
        assert "@" not in alias
        assert "/" not in alias

    def test_rejects_unsafe_input(self):
        """Should refuse input that would not produce a single segment."""
        with pytest.raises(ValueError, match="path-safe"):
            build_alias("a/b/c", "1.0.0")

    def test_module_name(self):
        """Module names should be identifiers derived from the alias."""
        assert module_name_for("scope-pkg-v1.0.0") == "pyuse_scope_pkg_v1_0_0"
        assert module_name_for("lodash-v4.17.21").isidentifier()
