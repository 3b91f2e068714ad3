# populator/cli/__main__.py

"""
Populator CLI

Usage: python -m populator.cli [command] [options]
"""

import click

from populator.cli.context import CLIContext
from populator.core.config import PopulatorConfig
from populator.cli.commands.rules import rules


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--config', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML settings file (defaults to POPULATOR_* environment variables)')
@click.pass_context
def cli(ctx, verbose, config_file):
    """Populator CLI - inspect and check transformation rule documents"""
    ctx.ensure_object(dict)

    config = PopulatorConfig.from_file(config_file) if config_file else PopulatorConfig.from_env()
    if verbose:
        config.log_level = "DEBUG"
    # console carries warnings only unless verbose, reports own stdout
    config.configure_logging(console_level="DEBUG" if verbose else "WARNING",
                             structured_format=False)

    ctx.obj['verbose'] = verbose
    ctx.obj['cli_context'] = CLIContext(config)


cli.add_command(rules)


if __name__ == '__main__':
    cli()
