"""CLI entrypoint: Typer app definition and command registration"""

import typer

from sitepub.cli.commands import build_cmd, list_cmd, publish_cmd


app = typer.Typer(name="sitepub", no_args_is_help=True, help="Static site publishing pipeline")

app.command(name="build")(build_cmd)
app.command(name="publish")(publish_cmd)
app.command(name="list")(list_cmd)
