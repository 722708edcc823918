"""Skill discovery and lookup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ._rwlock import ReadWriteLock
from .models import ScanDiagnostic, ScanResult, Skill
from .parser import SKILL_FILE_NAME, SkillParseError, parse_skill_md


class ScanError(Exception):
    """Raised when the skills root cannot be walked at all."""


def tool_name_for_skill(name: str) -> str:
    """Convert a skill name to its MCP tool name.

    Lowercases the name and replaces spaces and hyphens with underscores,
    so "Fetch Data" and "fetch-data" both become "fetch_data".
    """
    return name.lower().replace(" ", "_").replace("-", "_")


class SkillRegistry:
    """Discovers SKILL.md files below a root directory and indexes them by name.

    ``scan()`` rebuilds the whole index under an exclusive lock; lookups take a
    shared lock and may run concurrently with each other.

    Discovery order decides which of two clashing skills wins. The tree is
    walked top-down: a directory's own SKILL.md comes before anything in its
    subdirectories, and subdirectories are visited in ascending order of
    their names (plain code point comparison, so "B" sorts before "a").
    """

    def __init__(self, root: str | Path, logger: logging.Logger | None = None):
        self._root = os.fspath(root)
        self._logger = logger or logging.getLogger(__name__)
        self._lock = ReadWriteLock()
        self._skills: dict[str, Skill] = {}
        self._tool_names: dict[str, str] = {}  # tool name -> skill name

    @property
    def root(self) -> str:
        return self._root

    def scan(self) -> ScanResult:
        """Discover all skills below the root, replacing the current index.

        Problems with individual entries are logged and reported in the
        returned result; they never abort the scan.

        Raises:
            ScanError: The root does not exist, is not a directory or cannot be read.
        """
        with self._lock.write_locked():
            self._skills = {}
            self._tool_names = {}

            try:
                with os.scandir(self._root):
                    pass
            except OSError as e:
                raise ScanError(f"cannot scan skills root {self._root}: {e}") from e

            result = ScanResult()
            skills: dict[str, Skill] = {}
            tool_names: dict[str, str] = {}

            def on_walk_error(error: OSError) -> None:
                path = error.filename or self._root
                self._logger.warning(f"Walk error at {path}: {error}")
                result.skipped.append(ScanDiagnostic(path=os.fspath(path), reason=str(error)))

            for dirpath, dirnames, filenames in os.walk(self._root, onerror=on_walk_error):
                dirnames.sort()
                if SKILL_FILE_NAME not in filenames:
                    continue

                skill_file = os.path.join(dirpath, SKILL_FILE_NAME)
                reason = self._index_skill_file(skill_file, skills, tool_names)
                if reason is not None:
                    result.skipped.append(ScanDiagnostic(path=skill_file, reason=reason))

            result.accepted = list(skills)
            self._skills = skills
            self._tool_names = tool_names

        self._logger.debug(
            f"Scanned {self._root}: {len(result.accepted)} skill(s) indexed, {len(result.skipped)} skipped"
        )
        return result

    def _index_skill_file(self, skill_file: str, skills: dict[str, Skill], tool_names: dict[str, str]) -> str | None:
        """Parse one candidate and add it to the index being built.

        Returns None on success, otherwise the reason the file was skipped.
        """
        try:
            skill = parse_skill_md(skill_file)
        except SkillParseError as e:
            self._logger.warning(f"Failed to parse skill {skill_file}: {e}")
            return str(e)

        skill = skill.with_path(os.path.dirname(skill_file))

        existing = skills.get(skill.name)
        if existing is not None:
            self._logger.warning(
                f"Duplicate skill name {skill.name!r}: keeping {existing.path}, skipping {skill.path}"
            )
            return f"duplicate skill name {skill.name!r} (already defined in {existing.path})"

        tool_name = tool_name_for_skill(skill.name)
        existing_name = tool_names.get(tool_name)
        if existing_name is not None:
            self._logger.warning(
                f"Tool name collision on {tool_name!r}: keeping skill {existing_name!r}, skipping {skill.name!r}"
            )
            return f"tool name {tool_name!r} already used by skill {existing_name!r}"

        tool_names[tool_name] = skill.name
        skills[skill.name] = skill
        self._logger.debug(f"Discovered skill {skill.name!r} at {skill.path}")
        return None

    def get(self, name: str) -> Skill | None:
        """Return the skill with the given name, or None if there is none."""
        with self._lock.read_locked():
            return self._skills.get(name)

    def get_by_tool_name(self, tool_name: str) -> Skill | None:
        """Return the skill exposed under the given tool name, or None."""
        with self._lock.read_locked():
            name = self._tool_names.get(tool_name)
            return self._skills.get(name) if name is not None else None

    def list(self) -> list[Skill]:
        """Return all indexed skills sorted by name."""
        with self._lock.read_locked():
            return sorted(self._skills.values(), key=lambda skill: skill.name)

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._skills)

    def __repr__(self) -> str:
        return f"SkillRegistry(root={self._root!r}, skills={self.count()})"
