import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console(stderr=True)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the MCP server."""
    from glimmer_complete.mcp.server import create_mcp_server
    from glimmer_complete.scan import FilesystemSource
    from glimmer_complete.session import CompletionSession

    server = create_mcp_server(CompletionSession(FilesystemSource()))
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    if transport == "stdio":
        server.run(transport="stdio")
    else:
        server.run(transport=transport, host=host, port=port)  # type: ignore[arg-type]
