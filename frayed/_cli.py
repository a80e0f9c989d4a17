import dataclasses as dc
import itertools as it
import logging
import typing as ty

import click
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from frayed import sources
from frayed.defray import Defray
from frayed._version import version


logger = logging.getLogger(__name__)


@dc.dataclass
class CliConfig:
    head: int = 5
    strip: bool = True


def _configure_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=level, format="%(message)s", handlers=[handler], force=True
    )


def load_config(config_path: ty.Optional[str]) -> ty.Any:
    """Merges the YAML file at ``config_path`` over the default
    settings.
    """
    conf = OmegaConf.structured(CliConfig)
    if config_path is None:
        return conf
    try:
        conf = OmegaConf.merge(conf, OmegaConf.load(config_path))
    except OmegaConfBaseException as e:
        raise click.BadParameter(str(e), param_hint="--config") from e
    if conf.head < 0:
        raise click.BadParameter(
            f"head must not be negative, got {conf.head}.",
            param_hint="--config",
        )
    return conf


def _groups(ctx: click.Context, file: ty.TextIO) -> Defray[str]:
    conf = ctx.obj["config"]
    return Defray(sources.lines(file, strip=conf.strip))


@click.group()
@click.version_option(version, prog_name="frayed")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file overriding the default settings.",
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity.")
@click.pass_context
def main(ctx, config_path, verbose):
    """Inspect the blank-line separated groups of a text file, one group
    at a time.
    """
    _configure_logging(verbose)
    ctx.obj = {}
    ctx.obj["config"] = load_config(config_path)


@main.command()
@click.argument("file", type=click.File("r"))
@click.pass_context
def summary(ctx, file):
    """Tabulates the length and first line of each group in FILE."""
    table = Table("group", "lines", "first line")
    num_groups = 0
    for group in _groups(ctx, file):
        first = group.peek("")
        table.add_row(str(group.index), str(sum(1 for _ in group)), Text(first))
        num_groups = num_groups + 1
    logger.info("Read %d group(s) from %s.", num_groups, file.name)
    Console().print(table)


@main.command()
@click.option(
    "-n",
    "--lines",
    "num_lines",
    type=click.IntRange(min=0),
    default=None,
    help="Number of lines to print from each group.",
)
@click.argument("file", type=click.File("r"))
@click.pass_context
def head(ctx, num_lines, file):
    """Prints the first lines of each group in FILE, skipping the rest."""
    if num_lines is None:
        num_lines = ctx.obj["config"].head
    for group in _groups(ctx, file):
        if group.index > 0:
            click.echo()
        for line in it.islice(group, num_lines):
            click.echo(line)
