# ABOUTME: CLI package for MyReads, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from myreads.cli.commands import (
    add_cmd,
    edit_cmd,
    ls_cmd,
    rm_cmd,
    search_cmd,
    show_cmd,
    stats_cmd,
    tags_cmd,
)


@click.group()
@click.version_option(package_name="myreads")
@click.option("-v", "--verbose", count=True, help="Log more detail (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """MyReads - a personal reading library on top of Google Books."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


cli.add_command(search_cmd.search)
cli.add_command(show_cmd.show)
cli.add_command(add_cmd.add)
cli.add_command(edit_cmd.edit)
cli.add_command(rm_cmd.rm)
cli.add_command(ls_cmd.ls)
cli.add_command(stats_cmd.stats)
cli.add_command(tags_cmd.tags)
