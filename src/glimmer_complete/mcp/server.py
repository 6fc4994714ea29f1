"""FastMCP server exposing glimmer-complete tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from glimmer_complete.core.template_parser import TemplateSyntaxError
from glimmer_complete.models import ModuleKind, Position
from glimmer_complete.session import CompletionSession, ProjectNotFoundError


def create_mcp_server(session: CompletionSession) -> FastMCP:
    """Create a FastMCP server answering requests through ``session``."""

    mcp = FastMCP(
        "glimmer-complete",
        instructions="Complete component, helper, route and translation names in Ember templates.",
    )

    @mcp.tool()
    def complete(path: str, line: int, column: int, text: str | None = None) -> list[dict[str, Any]] | str:
        """List completion candidates at a zero-based line/column in a .hbs, .js or .ts file.

        Pass ``text`` to complete against unsaved editor content instead of the file on disk.
        """
        session.refresh()
        try:
            candidates = session.complete(path, Position(line=line, column=column), text=text)
        except (ProjectNotFoundError, FileNotFoundError, TemplateSyntaxError) as exc:
            return f"Error: {exc}"
        return [candidate.model_dump(mode="json") for candidate in candidates]

    @mcp.tool()
    def classify_path(path: str) -> dict[str, str] | str:
        """Return the logical module name and type of a project file."""
        session.refresh()
        try:
            descriptor = session.classify(path)
        except ProjectNotFoundError as exc:
            return f"Error: {exc}"
        if descriptor is None:
            return f"Error: {path} is not a recognised module."
        return {"name": descriptor.name, "type": descriptor.type.value}

    @mcp.tool()
    def list_modules(root: str, type: str | None = None) -> list[dict[str, str]] | str:
        """List the modules of a project, optionally only those of one type."""
        session.refresh()
        try:
            kind = ModuleKind(type) if type is not None else None
        except ValueError:
            return f"Error: unknown module type '{type}'. Supported: {[k.value for k in ModuleKind]}"
        return [{"name": d.name, "type": d.type.value} for d in session.modules(root, kind)]

    return mcp
