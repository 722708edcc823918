from __future__ import annotations

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Skill(BaseModel):
    """Represents a skill parsed from a SKILL.md file.

    The metadata fields come from the document's YAML frontmatter, the
    instructions from the markdown body that follows it. Instances are
    immutable once built; the registry derives ``path`` with :meth:`with_path`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    """The unique name/identifier of the skill."""

    description: str
    """A description of what the skill does and when to use it."""

    license: str | None = None
    """Optional license information for the skill."""

    allowed_tools: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("allowed_tools", "allowed-tools"),
    )
    """Tools the skill expects to use. Passed through, never interpreted."""

    instructions: str = ""
    """The markdown content after the frontmatter, stripped."""

    path: str = ""
    """Directory containing the SKILL.md file."""

    @field_validator("allowed_tools", mode="before")
    @classmethod
    def _split_allowed_tools(cls, value):
        # Frontmatter may spell the list inline, e.g. "allowed-tools: Read, Grep"
        if value is None:
            return []
        if isinstance(value, str):
            return [tool for tool in re.split(r"[,\s]+", value) if tool]
        return value

    def with_path(self, path: str) -> Skill:
        return self.model_copy(update={"path": path})


class SkillOutput(BaseModel):
    """Structured result returned alongside the rendered text of a skill tool."""

    name: str
    description: str
    instructions: str
    path: str


class ScanDiagnostic(BaseModel):
    """A candidate excluded from the index during a scan, and why."""

    path: str
    reason: str


class ScanResult(BaseModel):
    """Outcome of one registry scan.

    Scans are best-effort: problems with individual documents never abort the
    scan, they are collected in ``skipped`` instead.
    """

    accepted: list[str] = Field(default_factory=list)
    """Names of the accepted skills, in discovery order."""

    skipped: list[ScanDiagnostic] = Field(default_factory=list)
    """Entries that were excluded from the index."""
