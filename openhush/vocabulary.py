"""Custom vocabulary: domain-specific term replacement applied to transcribed text.

Vocabulary files are TOML. Each table is a section with optional ``enabled``
(default true) and ``case_sensitive`` (default false) flags; every other key
is a pattern mapped to its replacement::

    [replacements]
    case_sensitive = false
    "gonna" = "going to"

    [acronyms]
    case_sensitive = true
    "AI" = "artificial intelligence"
"""

from __future__ import annotations

import logging
import re
import threading
import tomllib
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

import platformdirs

log = logging.getLogger(__name__)

_FLAG_KEYS = frozenset({"enabled", "case_sensitive"})

# Letters and digits only: underscore and punctuation count as word boundaries.
_NOT_PRECEDED_BY_ALNUM = r"(?<![^\W_])"
_NOT_FOLLOWED_BY_ALNUM = r"(?![^\W_])"


class VocabularyError(Exception):
    """Raised when the vocabulary cannot be located or is misconfigured."""


class VocabularyReadError(VocabularyError):
    """The vocabulary file could not be read."""


class VocabularyParseError(VocabularyError):
    """The vocabulary file is not a valid vocabulary document."""


@dataclass
class VocabularySection:
    """One vocabulary section: its flags and its pattern -> replacement map."""

    enabled: bool = True
    case_sensitive: bool = False
    replacements: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class _Rule:
    pattern: str
    original_pattern: str
    replacement: str
    case_sensitive: bool
    section: str
    regex: re.Pattern[str]

    def apply(self, text: str) -> tuple[str, int]:
        replacement = self.replacement
        return self.regex.subn(lambda _match: replacement, text)


def _parse_section(name: str, table: Any) -> VocabularySection:
    if not isinstance(table, dict):
        raise VocabularyParseError(
            f"Failed to parse vocabulary file: section '{name}' must be a table"
        )
    enabled = table.get("enabled", True)
    case_sensitive = table.get("case_sensitive", False)
    for flag, value in (("enabled", enabled), ("case_sensitive", case_sensitive)):
        if not isinstance(value, bool):
            raise VocabularyParseError(
                f"Failed to parse vocabulary file: '{name}.{flag}' must be a boolean"
            )

    replacements: dict[str, str] = {}
    for key, value in table.items():
        if key in _FLAG_KEYS:
            continue
        if not isinstance(value, str):
            raise VocabularyParseError(
                f"Failed to parse vocabulary file: replacement for '{key}' "
                f"in section '{name}' must be a string"
            )
        replacements[key] = value
    return VocabularySection(enabled, case_sensitive, replacements)


def _compile_rule(section_name: str, section: VocabularySection, pattern: str, replacement: str) -> _Rule:
    key = pattern if section.case_sensitive else pattern.lower()
    flags = 0 if section.case_sensitive else re.IGNORECASE
    regex = re.compile(
        _NOT_PRECEDED_BY_ALNUM + re.escape(key) + _NOT_FOLLOWED_BY_ALNUM, flags
    )
    return _Rule(
        pattern=key,
        original_pattern=pattern,
        replacement=replacement,
        case_sensitive=section.case_sensitive,
        section=section_name,
        regex=regex,
    )


class VocabularyManager:
    """Loads, hot-reloads and applies vocabulary replacements from a TOML file."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._rules: list[_Rule] = []
        self._last_modified: int | None = None

    @classmethod
    def default_path(cls) -> Path:
        """The vocabulary file in the user's configuration directory."""
        try:
            config_dir = platformdirs.user_config_path("openhush", appauthor=False)
        except Exception as exc:
            raise VocabularyError(f"Invalid vocabulary configuration: {exc}") from exc
        return Path(config_dir) / "vocabulary.toml"

    def _modified(self) -> int | None:
        try:
            return self.path.stat().st_mtime_ns
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise VocabularyReadError(f"Failed to read vocabulary file: {exc}") from exc

    def load(self) -> bool:
        """Load the vocabulary file.

        Returns False if the file does not exist, True once rules are loaded
        (or are already current).
        """
        if not self.path.exists():
            log.debug("Vocabulary file not found: %s", self.path)
            return False

        modified = self._modified()
        with self._lock:
            if self._last_modified == modified:
                return True

        try:
            contents = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise VocabularyReadError(f"Failed to read vocabulary file: {exc}") from exc
        try:
            document = tomllib.loads(contents)
        except tomllib.TOMLDecodeError as exc:
            raise VocabularyParseError(f"Failed to parse vocabulary file: {exc}") from exc

        sections = {name: _parse_section(name, table) for name, table in document.items()}

        rules: list[_Rule] = []
        for name, section in sections.items():
            if not section.enabled:
                log.debug("Vocabulary section '%s' is disabled", name)
                continue
            for pattern, replacement in section.replacements.items():
                if not pattern:
                    continue
                rules.append(_compile_rule(name, section, pattern, replacement))

        rules.sort(key=lambda rule: len(rule.pattern.encode("utf-8")), reverse=True)
        log.info(
            "Loaded %d vocabulary rules from %d sections", len(rules), len(sections)
        )

        with self._lock:
            self._rules = rules
            self._last_modified = modified
        return True

    def check_reload(self) -> bool:
        """Reload the file if it changed since the last load; return whether it did."""
        if not self.path.exists():
            return False
        modified = self._modified()
        with self._lock:
            changed = self._last_modified != modified
        if not changed:
            return False
        log.info("Vocabulary file changed, reloading...")
        self.load()
        return True

    def apply(self, text: str) -> str:
        """Apply all replacements to ``text``, longest patterns first, at word boundaries."""
        with self._lock:
            rules = list(self._rules)
        if not rules:
            return text

        total = 0
        for rule in rules:
            text, count = rule.apply(text)
            if count:
                log.debug(
                    "Replaced '%s' -> '%s' (%d times, section: %s)",
                    rule.original_pattern,
                    rule.replacement,
                    count,
                    rule.section,
                )
                total += count

        if total:
            log.debug("Applied %d vocabulary replacements", total)
        return text

    def rule_count(self) -> int:
        """Number of loaded replacement rules."""
        with self._lock:
            return len(self._rules)