import typer

from proclaunch_cli.commands import launch

app = typer.Typer(
    help="proclaunch CLI",
    no_args_is_help=True,
    invoke_without_command=False,
    add_completion=False
)


@app.callback()
def callback():
    """proclaunch - start worker processes and confirm they are running."""
    pass


app.command(
    name="start",
    context_settings={"ignore_unknown_options": True},
)(launch.start)
app.command(name="probe")(launch.probe)


def main():
    app()


if __name__ == "__main__":
    main()
