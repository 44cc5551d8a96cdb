import asyncio
from typing import Optional

import typer
from dotenv import load_dotenv

# .env is loaded before any settings are read
load_dotenv()

app = typer.Typer()


@app.command()
def serve(
    host: str = "0.0.0.0",
    port: Optional[int] = None,
):
    """
    Serve the burst token agent over HTTP.

    Args:
        host (str, optional): Host to listen on. Defaults to 0.0.0.0.
        port (int, optional): Port to listen on. Defaults to HTTP_PORT.
    """
    from .app import main

    asyncio.run(main(host=host, port=port))


@app.command()
def version():
    """Print the installed version."""
    from . import __version__

    typer.echo(__version__)


def run():
    app()


if __name__ == "__main__":
    app()
