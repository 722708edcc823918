import textwrap
from pathlib import Path

import pytest


def skill_document(name: str | None, description: str | None, body: str = "", **extra: str) -> str:
    """Build the text of a SKILL.md file with the given frontmatter fields."""
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    for key, value in extra.items():
        lines.append(f"{key}: {value}")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


@pytest.fixture
def write_skill(tmp_path: Path):
    """Return a helper that writes a SKILL.md below ``tmp_path`` and returns its path."""

    def _write(relative_dir: str, content: str) -> Path:
        skill_dir = tmp_path / relative_dir
        skill_dir.mkdir(parents=True, exist_ok=True)
        skill_file = skill_dir / "SKILL.md"
        skill_file.write_text(content, encoding="utf-8")
        return skill_file

    return _write


@pytest.fixture
def three_skills(tmp_path: Path, write_skill) -> Path:
    write_skill(
        "csv-to-json",
        skill_document(
            "csv-to-json",
            "Converts a CSV file to a JSON file.",
            textwrap.dedent("""\
                # CSV to JSON Conversion
                Use the `convert.py` script in the scripts directory.
            """),
        ),
    )
    write_skill(
        "pdf-processing",
        skill_document("pdf-processing", "Extracts text and tables from PDF files.", "Run `extract.py`.\n"),
    )
    write_skill(
        "code-review",
        skill_document("code-review", "Reviews a diff for common mistakes.", "\n\nLook for bugs first.\n\n"),
    )
    return tmp_path


@pytest.fixture
def make_document():
    return skill_document
