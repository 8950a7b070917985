"""Main CLI entry point."""

import click
from pocketledger.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from pocketledger.domain.book import FinanceBook
from pocketledger.logging_config import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR, configure_logging

# Import and register all commands at module level
from pocketledger.cli.commands import asset, entry, snapshot, stats, wallet


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    envvar=LOG_LEVEL_ENV_VAR,
    help="Log verbosity (written to stderr)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Pocketledger - personal ledger and net-worth tracker.

    Record income and expenses, capture what your wallets actually hold,
    and reconcile the two to find missed transactions.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Open the database only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        book = FinanceBook(db)
        book.open()
        ctx.obj["db"] = db
        ctx.obj["book"] = book
        ctx.call_on_close(db.disconnect)


# Register all commands
wallet.register_commands(cli)
entry.register_commands(cli)
stats.register_commands(cli)
snapshot.register_commands(cli)
asset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
