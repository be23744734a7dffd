"""Serve the REST API."""

import click


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
@click.pass_context
def serve(ctx, host, port):
    """Run the REST API on the configured database."""
    import uvicorn

    from budgetit.api.app import create_app

    app = create_app(ctx.obj["db"], mirror_policy=ctx.obj["mirror_policy"])
    uvicorn.run(app, host=host, port=port)


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
