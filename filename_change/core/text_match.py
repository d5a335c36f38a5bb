"""
text_match.py - Text Matching Tools

Provides search pattern compilation, filename replacement and new name checks
"""

from typing import Optional
import logging
import re

logger = logging.getLogger(__name__)


def compile_search(
    search: str,
    case_sensitive: bool = True,
    regex_mode: bool = False
) -> Optional[re.Pattern]:
    """
    Compile search pattern

    Args:
        search: Search pattern (literal unless regex_mode)
        case_sensitive: Whether case-sensitive
        regex_mode: Whether search is a regular expression

    Returns:
        Compiled pattern, or None for an empty search

    Raises:
        re.error: Invalid regular expression
    """
    if not search:
        return None

    source = search if regex_mode else re.escape(search)
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(source, flags)


def replace_text(text: str, pattern: Optional[re.Pattern], new: str) -> str:
    """
    Replace every non-overlapping match, left to right

    The replacement is inserted verbatim, group references like \\1 are not expanded.
    """
    if pattern is None:
        return text
    return pattern.sub(lambda _m: new, text)


def check_new_name(name: str) -> tuple[bool, Optional[str]]:
    """
    Check if a proposed basename stays a plain filename

    Args:
        name: Proposed filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    if name in (".", ".."):
        return False, f"Filename cannot be {name}"

    for char in ('/', '\\', '\0'):
        if char in name:
            return False, f"Filename contains path separator or invalid character: {char!r}"

    return True, None


class NameTransformer:
    """Maps a basename to its proposed basename"""

    def __init__(
        self,
        search: str = "",
        replace: str = "",
        case_sensitive: bool = False,
        regex_mode: bool = False
    ):
        self.search = search
        self.replace = replace
        self.case_sensitive = case_sensitive
        self.regex_mode = regex_mode
        self.error: Optional[str] = None
        self.invalid_count = 0

        try:
            self.pattern = compile_search(search, case_sensitive, regex_mode)
        except re.error as e:
            # Degrade to identity
            self.pattern = None
            self.error = f"Search pattern error: {search} ({e})"
            logger.warning("search_pattern_error pattern=%r err=%s", search, e)

    @property
    def is_identity(self) -> bool:
        return self.pattern is None

    def transform(self, name: str) -> str:
        """Return proposed basename for name"""
        if self.pattern is None:
            return name

        new_name = replace_text(name, self.pattern, self.replace)
        if new_name == name:
            return name

        valid, reason = check_new_name(new_name)
        if not valid:
            self.invalid_count += 1
            logger.warning("rejected_new_name orig=%r new=%r reason=%s", name, new_name, reason)
            return name

        logger.debug("preview_rename orig=%r new=%r", name, new_name)
        return new_name
