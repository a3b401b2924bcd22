"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="grit",
    help="grit - git repository analytics: fame, effort and commit activity",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from ._main import main as _main_callback  # noqa: F401, E402
from .fame import fame as _fame  # noqa: F401, E402
from .bydate import bydate as _bydate  # noqa: F401, E402
from .byfile import byfile as _byfile  # noqa: F401, E402
from .effort import effort as _effort  # noqa: F401, E402


def main() -> None:
    app()
