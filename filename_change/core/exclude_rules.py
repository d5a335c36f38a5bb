"""
exclude_rules.py - Exclusion Rules Module

Compiles a comma-separated exclusion spec into matchers.
Each token is classified once:
- re:<pattern>   regular expression against the full path
- glob           contains * ? [ { , matched against the full path
- path substring contains a path separator
- name substring anything else, matched against the filename only
All comparisons ignore case.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union
from enum import Enum
import fnmatch
import logging
import re

logger = logging.getLogger(__name__)

GLOB_META = ('*', '?', '[', '{')
PATH_SEPARATORS = ('/', '\\')


class ExclusionKind(Enum):
    """Exclusion token kind"""
    REGEX = "regex"
    GLOB = "glob"
    PATH_SUBSTRING = "path_substring"
    FILENAME_SUBSTRING = "filename_substring"


class GlobError(ValueError):
    """Malformed glob pattern"""


def classify_token(token: str) -> ExclusionKind:
    """Classify a trimmed exclusion token"""
    if token[:3].lower() == "re:":
        return ExclusionKind.REGEX
    if any(ch in token for ch in GLOB_META):
        return ExclusionKind.GLOB
    if any(sep in token for sep in PATH_SEPARATORS):
        return ExclusionKind.PATH_SUBSTRING
    return ExclusionKind.FILENAME_SUBSTRING


def _check_classes(pattern: str) -> None:
    """Raise GlobError on an unterminated [...] class"""
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] == '[':
            j = i + 1
            if j < n and pattern[j] in '!^':
                j += 1
            if j < n and pattern[j] == ']':
                j += 1
            while j < n and pattern[j] != ']':
                j += 1
            if j >= n:
                raise GlobError(f"unclosed character class in {pattern!r}")
            i = j
        i += 1


def expand_braces(pattern: str) -> List[str]:
    """
    Expand {a,b} alternation (nesting allowed)

    Args:
        pattern: Glob pattern

    Returns:
        Alternatives without braces

    Raises:
        GlobError: Unbalanced braces
    """
    depth = 0
    start = -1
    for i, ch in enumerate(pattern):
        if ch == '{':
            if depth == 0:
                start = i
            depth += 1
        elif ch == '}':
            if depth == 0:
                raise GlobError(f"unopened alternate group in {pattern!r}")
            depth -= 1
            if depth == 0:
                head, body, tail = pattern[:start], pattern[start + 1:i], pattern[i + 1:]
                results = []
                for option in _split_top_level(body):
                    for rest in expand_braces(option + tail):
                        results.append(head + rest)
                return results
    if depth:
        raise GlobError(f"unclosed alternate group in {pattern!r}")
    return [pattern]


def _split_top_level(body: str) -> List[str]:
    parts = []
    depth = 0
    current = ""
    for ch in body:
        if ch == ',' and depth == 0:
            parts.append(current)
            current = ""
            continue
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
        current += ch
    parts.append(current)
    return parts


def compile_glob(pattern: str) -> re.Pattern:
    """Compile glob pattern into a case-insensitive regex"""
    alternatives = expand_braces(pattern)
    for alt in alternatives:
        _check_classes(alt)
    source = "|".join(f"(?:{fnmatch.translate(alt)})" for alt in alternatives)
    return re.compile(source, re.IGNORECASE)


@dataclass
class ExclusionRules:
    """Compiled exclusion spec"""
    regexes: List[re.Pattern] = field(default_factory=list)
    globs: List[re.Pattern] = field(default_factory=list)
    path_substrings: List[str] = field(default_factory=list)
    filename_substrings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @classmethod
    def compile(cls, spec: str) -> "ExclusionRules":
        """
        Compile an exclusion spec

        Args:
            spec: Comma-separated tokens

        Returns:
            Compiled rules; bad regex/glob tokens are dropped and listed in errors
        """
        rules = cls()
        for raw in (spec or "").split(','):
            token = raw.strip()
            if not token:
                continue

            kind = classify_token(token)
            if kind is ExclusionKind.REGEX:
                pat = token[3:]
                try:
                    rules.regexes.append(re.compile(pat, re.IGNORECASE))
                except re.error as e:
                    rules.errors.append(f"Exclude regex error: {pat}")
                    logger.debug("exclude_regex_error pattern=%r err=%s", pat, e)
            elif kind is ExclusionKind.GLOB:
                try:
                    rules.globs.append(compile_glob(token))
                except (GlobError, re.error) as e:
                    rules.errors.append(f"Exclude glob error: {token}")
                    logger.debug("exclude_glob_error pattern=%r err=%s", token, e)
            elif kind is ExclusionKind.PATH_SUBSTRING:
                rules.path_substrings.append(token.casefold())
            else:
                rules.filename_substrings.append(token.casefold())
        return rules

    @property
    def is_empty(self) -> bool:
        return not (self.regexes or self.globs or self.path_substrings or self.filename_substrings)

    def match_kind(self, path: Union[str, Path]) -> Optional[ExclusionKind]:
        """Return the kind of the first matching group, or None"""
        full_path = str(path)
        if any(g.match(full_path) for g in self.globs):
            return ExclusionKind.GLOB
        if any(r.search(full_path) for r in self.regexes):
            return ExclusionKind.REGEX

        path_lower = full_path.casefold()
        name_lower = Path(full_path).name.casefold()
        if any(tok in name_lower for tok in self.filename_substrings):
            return ExclusionKind.FILENAME_SUBSTRING
        if any(sub in path_lower for sub in self.path_substrings):
            return ExclusionKind.PATH_SUBSTRING
        return None

    def is_excluded(self, path: Union[str, Path]) -> bool:
        """Whether path matches any compiled matcher"""
        kind = self.match_kind(path)
        if kind is not None:
            logger.debug("excluded path=%s reason=%s", path, kind.value)
            return True
        return False
