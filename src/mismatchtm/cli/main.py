"""
Main CLI entry point for mismatchTm.

Defines the root command group and registers all subcommands.
Uses Click framework for argument parsing and help generation.
"""

import logging
from typing import Optional

import click

from mismatchtm import __version__


# Custom Click context settings for consistent behavior
CONTEXT_SETTINGS = dict(
    help_option_names=["-h", "--help"],
    max_content_width=120,
)


class AliasedGroup(click.Group):
    """
    Click group that accepts unambiguous command prefixes.

    Underscores and hyphens are interchangeable (show_contexts == show-contexts).
    """

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        normalized_name = cmd_name.replace("_", "-")

        rv = click.Group.get_command(self, ctx, normalized_name)
        if rv is not None:
            return rv

        matches = [x for x in self.list_commands(ctx) if x.startswith(normalized_name)]
        if not matches:
            return None
        elif len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        else:
            ctx.fail(f"Ambiguous command '{cmd_name}': could be {', '.join(sorted(matches))}")
            return None


@click.group(cls=AliasedGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-V", "--version", prog_name="mismatchtm")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output with detailed logging.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress all output except errors.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """
    mismatchTm: Tm shifts of single-base mismatches in genomic contexts.

    For each trinucleotide context around an internal mismatch, predicts
    the change in duplex melting temperature at one or more cation
    concentrations, using only contexts found in k-mers of a genome.

    \b
    Commands:
      scan      - Scan a genome and write Tm deltas per context
      contexts  - Export the 192 mismatch configurations
      info      - Show version and dependencies

    \b
    Quick start:
      mismatchtm scan -f genome.fa -l 20 -c 0.008,0.08 -o mismatch_tm.tsv
    """
    ctx.ensure_object(dict)

    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    if verbose and not quiet:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    elif quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(
            level=logging.WARNING,
            format="%(levelname)s - %(message)s",
        )


from mismatchtm.cli.scan import scan, contexts  # noqa: E402

cli.add_command(scan)
cli.add_command(contexts)


@cli.command()
def info() -> None:
    """
    Display version and environment information.
    """
    import sys
    import platform

    click.echo(f"mismatchTm version: {__version__}")
    click.echo(f"Python version: {sys.version}")
    click.echo(f"Platform: {platform.platform()}")

    click.echo("\nInstalled dependencies:")

    dependencies = {
        "biopython": "Bio",
        "numpy": "numpy",
        "pandas": "pandas",
        "click": "click",
        "pyyaml": "yaml",
    }

    for name, import_name in dependencies.items():
        try:
            module = __import__(import_name)
            version = getattr(module, "__version__", "unknown")
            click.echo(f"  {name}: {version}")
        except ImportError:
            click.echo(f"  {name}: not installed")


if __name__ == "__main__":
    cli()
