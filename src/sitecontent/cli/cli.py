"""CLI entrypoint: Typer app definition and command registration"""

import typer

from sitecontent.cli.commands import blog_cmd, build_cmd, dimensions_cmd, gallery_cmd, walk_cmd


app = typer.Typer(name="sitecontent", help="Static content build and upload helpers for the site")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Run the full content build when no command is given."""
    if ctx.invoked_subcommand is None:
        build_cmd()


app.command(name="build")(build_cmd)
app.command(name="blog")(blog_cmd)
app.command(name="gallery")(gallery_cmd)
app.command(name="walk")(walk_cmd)
app.command(name="dimensions")(dimensions_cmd)
