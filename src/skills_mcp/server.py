"""MCP server exposing each discovered skill as a tool."""

import logging
from typing import Annotated, Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

from .models import Skill, SkillOutput
from .registry import SkillRegistry, tool_name_for_skill

SERVER_NAME = "skills"

SERVER_INSTRUCTIONS = (
    "This server provides Claude-compatible skills as tools. "
    "Call a skill tool to receive expert instructions for that task."
)


def format_skill_response(skill: Skill) -> str:
    """Render a skill as the text returned to the calling model."""
    return (
        f"# Skill: {skill.name}\n\n"
        f"**Description:** {skill.description}\n\n"
        "---\n\n"
        "## Instructions\n\n"
        f"{skill.instructions}"
    )


def build_skill_output(skill: Skill) -> SkillOutput:
    return SkillOutput(
        name=skill.name,
        description=skill.description,
        instructions=skill.instructions,
        path=skill.path,
    )


def invoke_skill(skill: Skill) -> CallToolResult:
    """Build the tool result for a skill: rendered text plus a structured echo."""
    return CallToolResult(
        content=[TextContent(type="text", text=format_skill_response(skill))],
        structuredContent=build_skill_output(skill).model_dump(),
    )


class SkillsServer:
    """Wraps a FastMCP server that exposes the skills of a registry as tools.

    Tools are registered once, from the registry contents at construction
    time. Each tool takes no arguments.
    """

    def __init__(self, registry: SkillRegistry, logger: logging.Logger | None = None):
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)
        self.mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

        self._register_skill_tools()

    def _register_skill_tools(self) -> None:
        for skill in self.registry.list():
            self._register_skill_tool(skill)

    def _register_skill_tool(self, skill: Skill) -> None:
        tool_name = tool_name_for_skill(skill.name)

        def call_skill() -> Annotated[CallToolResult, SkillOutput]:
            return invoke_skill(skill)

        self.mcp.add_tool(call_skill, name=tool_name, description=skill.description)
        self.logger.debug(f"Registered skill tool {tool_name!r} for skill {skill.name!r}")

    def run(self, transport: Literal["stdio", "sse", "streamable-http"] = "stdio") -> None:
        """Serve until the transport closes."""
        self.logger.info(f"Starting skills MCP server with {self.registry.count()} skill(s) from {self.registry.root}")
        self.mcp.run(transport=transport)
