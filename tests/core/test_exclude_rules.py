"""Unit tests for exclusion spec compilation and matching."""

import pytest

from filename_change.core.exclude_rules import (
    ExclusionKind,
    ExclusionRules,
    GlobError,
    classify_token,
    compile_glob,
    expand_braces,
)


class TestClassifyToken:
    """Tests for classify_token()."""

    @pytest.mark.parametrize(
        ("token", "kind"),
        [
            ("re:old", ExclusionKind.REGEX),
            ("RE:*.tmp", ExclusionKind.REGEX),
            ("*.bak", ExclusionKind.GLOB),
            ("file?.txt", ExclusionKind.GLOB),
            ("[ab].txt", ExclusionKind.GLOB),
            ("{a,b}.txt", ExclusionKind.GLOB),
            ("build/*", ExclusionKind.GLOB),
            ("build/", ExclusionKind.PATH_SUBSTRING),
            ("dist\\out", ExclusionKind.PATH_SUBSTRING),
            (".tmp", ExclusionKind.FILENAME_SUBSTRING),
        ],
    )
    def test_kinds(self, token: str, kind: ExclusionKind) -> None:
        assert classify_token(token) is kind


class TestGlob:
    """Tests for glob compilation."""

    def test_expand_braces_nested(self) -> None:
        assert expand_braces("a{b,c{d,e}}f") == ["abf", "acdf", "acef"]

    def test_unbalanced_braces(self) -> None:
        with pytest.raises(GlobError):
            expand_braces("a{b")
        with pytest.raises(GlobError):
            expand_braces("a}b")

    def test_unclosed_class(self) -> None:
        with pytest.raises(GlobError):
            compile_glob("[abc")

    def test_star_crosses_separators(self) -> None:
        assert compile_glob("*.bak").match("/data/sub/file.bak")

    def test_ignores_case(self) -> None:
        assert compile_glob("*.BAK").match("/data/file.bak")

    def test_alternation(self) -> None:
        glob = compile_glob("*.{jpg,png}")
        assert glob.match("/data/a.png")
        assert glob.match("/data/a.JPG")
        assert not glob.match("/data/a.gif")


class TestExclusionRules:
    """Tests for ExclusionRules."""

    def test_empty_spec_excludes_nothing(self) -> None:
        rules = ExclusionRules.compile("")

        assert rules.is_empty
        assert not rules.is_excluded("/data/anything.txt")

    def test_blank_tokens_ignored(self) -> None:
        rules = ExclusionRules.compile(" , ,")
        assert rules.is_empty

    def test_filename_substring_and_regex(self) -> None:
        rules = ExclusionRules.compile(".tmp, re:old")

        assert rules.match_kind("/data/cache.tmp") is ExclusionKind.FILENAME_SUBSTRING
        assert rules.match_kind("/data/old_notes.txt") is ExclusionKind.REGEX
        assert rules.match_kind("/archive/old/notes.txt") is ExclusionKind.REGEX
        assert not rules.is_excluded("/data/notes.txt")

    def test_filename_substring_ignores_directories(self) -> None:
        rules = ExclusionRules.compile("proj")

        assert not rules.is_excluded("/proj/a.txt")
        assert rules.is_excluded("/data/my_PROJ.txt")

    def test_path_substring(self) -> None:
        rules = ExclusionRules.compile("Build/")

        assert rules.is_excluded("/proj/build/out.txt")
        assert not rules.is_excluded("/proj/builder.txt")

    def test_regex_ignores_case(self) -> None:
        rules = ExclusionRules.compile("re:^/data/DRAFT")
        assert rules.is_excluded("/data/draft_1.txt")

    def test_bad_regex_is_reported_and_dropped(self) -> None:
        rules = ExclusionRules.compile("re:(, .tmp")

        assert rules.errors == ["Exclude regex error: ("]
        assert rules.regexes == []
        assert not rules.is_excluded("/data/(.txt")
        assert rules.is_excluded("/data/x.tmp")

    def test_bad_glob_is_reported_and_dropped(self) -> None:
        rules = ExclusionRules.compile("[abc")

        assert rules.errors == ["Exclude glob error: [abc"]
        assert rules.globs == []
        assert not rules.is_excluded("/data/[abc")

    def test_any_group_excludes(self) -> None:
        rules = ExclusionRules.compile("*.bak, logs/, re:\\d{4}, secret")

        assert rules.is_excluded("/d/a.bak")
        assert rules.is_excluded("/d/logs/today.txt")
        assert rules.is_excluded("/d/scan2024.pdf")
        assert rules.is_excluded("/d/Secret.md")
        assert not rules.is_excluded("/d/plain.txt")
