import logging
from typing import Annotated, Optional

import typer

from . import __version__
from ._config import DEFAULT_SKILLS_ROOT, SKILLS_ROOT_ENV_VAR, SkillsConfig
from ._logging import configure_logging
from .registry import ScanError, SkillRegistry
from .server import SkillsServer

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="An MCP server that exposes Claude-compatible skills as tools.",
)


def print_skills(registry: SkillRegistry) -> None:
    skills = registry.list()
    if not skills:
        typer.echo("No skills found.")
        return

    typer.echo(f"Found {len(skills)} skill(s) in {registry.root}:\n")
    for skill in skills:
        typer.echo(f"  {skill.name}")
        typer.echo(f"    {skill.description}")
        typer.echo(f"    Path: {skill.path}\n")


@app.command()
def main(
    skills_root: Annotated[
        Optional[str],
        typer.Argument(
            help=f"Directory to scan for SKILL.md files (default: ${SKILLS_ROOT_ENV_VAR} or {DEFAULT_SKILLS_ROOT})",
            show_default=False,
        ),
    ] = None,
    list_skills: Annotated[bool, typer.Option("--list", help="List discovered skills and exit")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable verbose logging")] = False,
    version: Annotated[bool, typer.Option("--version", help="Print version and exit")] = False,
):
    if version:
        typer.echo(f"skills {__version__}")
        raise typer.Exit()

    configure_logging(verbose)

    config = SkillsConfig(skills_root)
    try:
        config.validate()
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    registry = SkillRegistry(config.root)
    try:
        registry.scan()
    except ScanError as e:
        logger.error(f"Failed to scan skills: {e}")
        raise typer.Exit(code=1) from e

    if list_skills:
        print_skills(registry)
        raise typer.Exit()

    server = SkillsServer(registry)
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")


def run():
    app()


if __name__ == "__main__":
    run()
