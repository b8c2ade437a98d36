import subprocess
import sys
from pathlib import Path

from httpx import ASGITransport, AsyncClient

from biblioteca.app import create_app
from biblioteca.config import DB_PATH
from biblioteca.mcp.client import BibliotecaClient
from biblioteca.mcp.server import create_mcp_server


def run_migrations():
    """Run Alembic migrations before starting the MCP server."""
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=False,
    )
    if result.returncode != 0:
        sys.exit(1)


def main():
    run_migrations()

    app = create_app()
    transport = ASGITransport(app=app)
    http = AsyncClient(transport=transport, base_url="http://localhost")
    client = BibliotecaClient(http)
    mcp = create_mcp_server(client)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
