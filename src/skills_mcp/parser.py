"""Parsing of SKILL.md documents.

A SKILL.md file starts with a YAML frontmatter block delimited by lines that
are exactly ``---``; everything after the closing delimiter is the skill's
markdown instructions::

    ---
    name: csv-to-json
    description: Converts a CSV file to a JSON file.
    ---
    # CSV to JSON Conversion
    ...
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import Skill

logger = logging.getLogger(__name__)

SKILL_FILE_NAME = "SKILL.md"

# Skills are handed verbatim to a model, keep them small enough for its context window.
MAX_SKILL_FILE_SIZE = 64 * 1024

FRONTMATTER_DELIMITER = "---"

# Fields kept as the scalar's source text, so "license: 2024" stays "2024"
_TEXT_KEYS = ("name", "description", "license")

_FRONTMATTER_KEYS = frozenset({"name", "description", "license", "allowed_tools", "allowed-tools"})


class SkillParseError(Exception):
    """Raised when a SKILL.md file cannot be turned into a :class:`Skill`."""


class FileTooLargeError(SkillParseError):
    def __init__(self, size: int, limit: int = MAX_SKILL_FILE_SIZE):
        super().__init__(f"skill file exceeds maximum size: {size} bytes (max {limit})")
        self.size = size
        self.limit = limit


class NoFrontmatterError(SkillParseError):
    def __init__(self, message: str = "no YAML frontmatter found"):
        super().__init__(message)


class MissingNameError(SkillParseError):
    def __init__(self, message: str = "skill name is required"):
        super().__init__(message)


class MissingDescriptionError(SkillParseError):
    def __init__(self, message: str = "skill description is required"):
        super().__init__(message)


class InvalidFrontmatterError(SkillParseError):
    """The frontmatter block exists but is not valid skill metadata."""


def _is_blank(value: Any) -> bool:
    # Whitespace-only counts as missing, a name or description of "  " is never useful
    return value is None or (isinstance(value, str) and not value.strip())


def _scalar_source_text(frontmatter: str) -> dict[str, str]:
    """Map each top-level key to the source text of its scalar value."""
    node = yaml.compose(frontmatter, Loader=yaml.SafeLoader)
    if not isinstance(node, yaml.MappingNode):
        return {}
    return {
        key.value: value.value
        for key, value in node.value
        if isinstance(key, yaml.ScalarNode) and isinstance(value, yaml.ScalarNode)
    }


def _split_document(skill_file: Path) -> tuple[str, str]:
    """Split a SKILL.md file into its frontmatter and body text.

    The file is streamed line by line; reading stops early when the first
    line is not a frontmatter delimiter.
    """
    frontmatter: list[str] = []
    body: list[str] = []
    in_frontmatter = False
    closed = False

    with open(skill_file, encoding="utf-8") as f:
        for line_num, line in enumerate(f, start=1):
            line = line.rstrip("\n")

            if line_num == 1:
                if line != FRONTMATTER_DELIMITER:
                    break
                in_frontmatter = True
                continue

            if in_frontmatter:
                if line == FRONTMATTER_DELIMITER:
                    in_frontmatter = False
                    closed = True
                else:
                    frontmatter.append(line)
            else:
                body.append(line)

    if not closed:
        raise NoFrontmatterError()

    return "\n".join(frontmatter), "\n".join(body)


def parse_skill_md(skill_file: str | Path) -> Skill:
    """Parse a SKILL.md file and return the resulting :class:`Skill`.

    The returned skill has an empty ``path``; setting it is up to the caller.

    Raises:
        FileTooLargeError: The file is larger than ``MAX_SKILL_FILE_SIZE``.
        NoFrontmatterError: There is no (non-empty) frontmatter block.
        MissingNameError: The frontmatter has no ``name``.
        MissingDescriptionError: The frontmatter has no ``description``.
        InvalidFrontmatterError: The frontmatter is not valid YAML metadata.
        SkillParseError: The file could not be read.
    """
    skill_file = Path(skill_file)

    try:
        st = os.stat(skill_file)
    except OSError as e:
        raise SkillParseError(f"stat skill file: {e}") from e
    # Opening a FIFO or device would block the scan
    if not stat.S_ISREG(st.st_mode):
        raise SkillParseError("not a regular file")
    if st.st_size > MAX_SKILL_FILE_SIZE:
        raise FileTooLargeError(st.st_size)

    try:
        frontmatter, body = _split_document(skill_file)
    except (OSError, UnicodeDecodeError) as e:
        raise SkillParseError(f"read skill file: {e}") from e

    if not frontmatter.strip():
        raise NoFrontmatterError("empty YAML frontmatter")

    try:
        metadata = yaml.safe_load(frontmatter)
    except yaml.YAMLError as e:
        raise InvalidFrontmatterError(f"parse frontmatter: {e}") from e

    # A block holding only comments loads as None
    if metadata is None:
        raise NoFrontmatterError("empty YAML frontmatter")
    if not isinstance(metadata, dict):
        raise InvalidFrontmatterError(f"parse frontmatter: expected a mapping, got {type(metadata).__name__}")

    fields = {key: value for key, value in metadata.items() if key in _FRONTMATTER_KEYS}
    source_text = _scalar_source_text(frontmatter)
    for key in _TEXT_KEYS:
        value = fields.get(key)
        if value is not None and not isinstance(value, str) and key in source_text:
            fields[key] = source_text[key]

    if _is_blank(fields.get("name")):
        raise MissingNameError()
    if _is_blank(fields.get("description")):
        raise MissingDescriptionError()

    try:
        skill = Skill.model_validate({**fields, "instructions": body.strip()})
    except ValidationError as e:
        raise InvalidFrontmatterError(f"parse frontmatter: {e}") from e

    logger.debug(f"Parsed skill {skill.name!r} from {skill_file}")
    return skill
