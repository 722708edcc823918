import os
from pathlib import Path

SKILLS_ROOT_ENV_VAR = "SKILLS_ROOT"
DEFAULT_SKILLS_ROOT = "~/.skills"


def default_skills_root() -> str:
    """Skills root used when none is given on the command line."""
    return os.getenv(SKILLS_ROOT_ENV_VAR) or DEFAULT_SKILLS_ROOT


def expand_path(path: str) -> Path:
    """Expand a leading ``~`` and make the path absolute."""
    return Path(os.path.abspath(os.path.expanduser(path)))


class SkillsConfig:
    _root: Path

    def __init__(self, root: str | None = None):
        self._root = expand_path(root or default_skills_root())

    @property
    def root(self) -> Path:
        return self._root

    def validate(self) -> None:
        if not self._root.exists():
            raise ValueError(f"Skills root directory does not exist: {self._root}")
        if not self._root.is_dir():
            raise ValueError(f"Skills root is not a directory: {self._root}")
