"""Resolve command implementation.

Shows which file a request path is served from.
"""

from pathlib import Path
from typing import Annotated

import typer

from sitesweep.config.loader import get_config_path, public_root_path, require_config
from sitesweep.serving.public_paths import resolve_public_file
from sitesweep.utils.formatting import print_warning


def resolve_request(
    request_path: Annotated[str, typer.Argument(help="Request path, e.g. /blog/post.")],
    public_root: Annotated[
        Path | None,
        typer.Option(
            "--public-root",
            "-r",
            help="Directory to resolve against. Defaults to the configured public root.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to sitesweep.toml.",
        ),
    ] = None,
) -> None:
    """Print the file a request path resolves to.

    Examples:
        sitesweep resolve /about
        sitesweep resolve /blog/../docs --public-root _site
    """
    if public_root is None:
        path = config or get_config_path()
        public_root = public_root_path(require_config(path), path)

    resolved = resolve_public_file(request_path, public_root)
    typer.echo(str(resolved))

    if not resolved.is_file():
        print_warning(f"No such file: {resolved}")
        raise typer.Exit(code=1)
