"""
Command line entry point.

    langswitch change-default-language de-DE
"""
import logging
import sys
from typing import Dict, List, Optional

import click
import typer
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from langswitch.core.config import settings
from langswitch.core.database import get_engine
from langswitch.core.exceptions import (
    DefaultLanguageSwapError,
    NotFoundError,
    UnsupportedDatabaseError,
    ValidationError,
)
from langswitch.services.default_language_service import DefaultLanguageService, SwapProgress
from langswitch.services.locale_service import LocaleService

logger = logging.getLogger(__name__)

CONFIRMATION = (
    "Are you sure you want to change the system default language?\n"
    "Loss of data is possible, please create a backup of the database!"
)

app = typer.Typer(add_completion=False, no_args_is_help=True)


class ProgressBars(SwapProgress):
    """Shows each phase of the swap as a Typer progress bar."""

    def __init__(self):
        self._bar = None

    def start(self, label: str, total: int) -> None:
        self.finish()
        typer.secho(label, fg=typer.colors.GREEN)
        self._bar = typer.progressbar(length=total, show_pos=True, show_eta=True)
        self._bar.__enter__()

    def advance(self) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def finish(self) -> None:
        if self._bar is not None:
            self._bar.__exit__(None, None, None)
            self._bar = None


def _error(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


def stdin_is_interactive() -> bool:
    return sys.stdin.isatty()


def choose_locale(choices: Dict[str, List[str]]) -> str:
    """Ask for a locale name, then for a code when the name has several."""
    name = typer.prompt(
        "Please choose a language",
        type=click.Choice(list(choices)),
        show_choices=True,
    )
    codes = choices[name]
    if len(codes) == 1:
        return codes[0]
    return typer.prompt(
        "Please choose a language code",
        type=click.Choice(codes),
        show_choices=True,
    )


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output")) -> None:
    """Manage the system default language."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )


@app.command("change-default-language")
def change_default_language(
    locale: Optional[str] = typer.Argument(None, help="The locale for the new system default language"),
    no_interaction: bool = typer.Option(
        False, "--no-interaction", "-n", help="Don't ask any interactive question"
    ),
) -> None:
    """Change the system default language."""
    engine = get_engine()
    default_language_id = settings.default_language_id_bytes
    interactive = not no_interaction and stdin_is_interactive()

    if not locale:
        if not interactive:
            _error("argument locale shouldn't be empty")
            raise typer.Exit(1)
        with Session(engine) as session:
            choices = LocaleService(session, default_language_id).get_locale_choices()
        if not choices:
            _error("no locales found")
            raise typer.Exit(1)
        locale = choose_locale(choices)

    if interactive and not typer.confirm(CONFIRMATION, default=True):
        raise typer.Exit(0)

    service = DefaultLanguageService(
        engine,
        default_language_id,
        language_table=settings.language_table,
        language_id_column=settings.language_id_column,
        translation_table_pattern=settings.translation_table_pattern,
    )
    try:
        result = service.change_default_language(locale, progress=ProgressBars())
    except (ValidationError, NotFoundError, UnsupportedDatabaseError) as e:
        _error(str(e))
        raise typer.Exit(1)
    except DefaultLanguageSwapError as e:
        _error(f"{e} Cause: {e.__cause__!r}")
        raise typer.Exit(2)
    except SQLAlchemyError as e:
        logger.error("Database error while changing the system default language", exc_info=True)
        _error(f"database error: {e}")
        raise typer.Exit(2)

    if not result.changed:
        typer.secho(f"nothing to do, {locale} is already the system default language", fg=typer.colors.YELLOW)
        return

    for table in result.tables:
        logger.debug(f"{table.table}: promoted {table.promoted}, backfilled {table.backfilled}")
    typer.secho(f"system default language changed to {result.locale_code}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
