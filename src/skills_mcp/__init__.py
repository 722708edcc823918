import importlib.metadata

from ._config import SkillsConfig
from ._logging import configure_logging
from .models import ScanDiagnostic, ScanResult, Skill, SkillOutput
from .parser import (
    MAX_SKILL_FILE_SIZE,
    SKILL_FILE_NAME,
    FileTooLargeError,
    InvalidFrontmatterError,
    MissingDescriptionError,
    MissingNameError,
    NoFrontmatterError,
    SkillParseError,
    parse_skill_md,
)
from .registry import ScanError, SkillRegistry, tool_name_for_skill

__version__ = importlib.metadata.version("skills-mcp-server")

__all__ = [
    "Skill",
    "SkillOutput",
    "ScanDiagnostic",
    "ScanResult",
    "parse_skill_md",
    "MAX_SKILL_FILE_SIZE",
    "SKILL_FILE_NAME",
    "SkillParseError",
    "FileTooLargeError",
    "NoFrontmatterError",
    "MissingNameError",
    "MissingDescriptionError",
    "InvalidFrontmatterError",
    "SkillRegistry",
    "ScanError",
    "tool_name_for_skill",
    "SkillsConfig",
    "configure_logging",
]
