# populator/cli/commands/rules.py - Rules document inspection commands

import click
import yaml
from jinja2 import TemplateError
from typing import Any, Dict, Optional, Tuple

from ...core.config import PopulatorConfig
from ...types import RuleKind, Substitution


def _parse_vars(pairs: Tuple[str, ...]) -> Dict[str, str]:
    context = {}
    for pair in pairs:
        if '=' not in pair:
            raise click.BadParameter(f"Expected NAME=VALUE, got {pair!r}", param_hint='--var')
        name, value = pair.split('=', 1)
        context[name.strip()] = value
    return context


def _document_or_default(document: Optional[str], config: PopulatorConfig) -> str:
    document = document or config.rules_file
    if not document:
        raise click.UsageError("No DOCUMENT given and no rules file configured (POPULATOR_RULES_FILE)")
    return document


@click.group()
def rules():
    """Transformation rule documents"""
    pass


@rules.command('check')
@click.argument('class_name')
@click.argument('document', required=False)
@click.option('--locale-key', help='Top level section of the document to read')
@click.option('--locale', help='Registry locale to load the rules into')
@click.option('--var', 'variables', multiple=True, help='Template variable as NAME=VALUE')
@click.pass_context
def check(ctx, class_name, document, locale_key, locale, variables):
    """Apply the CLASS_NAME section of DOCUMENT and print the resulting rules
    
    DOCUMENT defaults to the configured rules file (POPULATOR_RULES_FILE).
    
    Examples:
        rules check Project transforms.yaml
        
        rules check Project transforms.yaml --locale-key fr --var year=2024
    """
    cli_context = ctx.obj['cli_context']
    config = cli_context.config
    registry = cli_context.registry
    document = _document_or_default(document, config)

    try:
        result = registry.configure_from(
            class_name,
            document,
            locale_key=locale_key or config.locale_key,
            locale=locale,
            context=_parse_vars(variables),
        )
    except (OSError, TemplateError, yaml.YAMLError) as e:
        raise click.ClickException(f"Failed to load rules document: {e}")

    if result is None:
        click.echo(f"No rules for {class_name} in {document}")
        return

    click.echo(f"{class_name} [{result.locale}]: {result.applied} rule(s) applied")

    store = registry.instance(locale)
    for section, operators in store.rules_for(class_name).items():
        if not operators:
            continue
        click.echo(f"  {section}:")
        for operator, value in operators.items():
            click.echo(f"    {operator}: {_format_value(value)}")

    if result.skipped:
        click.echo(f"Skipped: {', '.join(result.skipped)}", err=True)
        ctx.exit(1)


@rules.command('show')
@click.argument('document', required=False)
@click.option('--locale-key', help='Top level section of the document to read')
@click.option('--var', 'variables', multiple=True, help='Template variable as NAME=VALUE')
@click.pass_context
def show(ctx, document, locale_key, variables):
    """List the class sections of DOCUMENT with rule counts per kind"""
    cli_context = ctx.obj['cli_context']
    document = _document_or_default(document, cli_context.config)
    loader = cli_context.registry.loader
    locale_key = locale_key or cli_context.config.locale_key

    try:
        data = loader.load(document, _parse_vars(variables))
    except (OSError, TemplateError, yaml.YAMLError) as e:
        raise click.ClickException(f"Failed to load rules document: {e}")

    if data is None:
        raise click.ClickException(f"Rules document not found or empty: {document}")

    if locale_key:
        data = data.get(locale_key) if isinstance(data, dict) else None
        if data is None:
            raise click.ClickException(f"Locale section '{locale_key}' not found in {document}")

    if not isinstance(data, dict):
        raise click.ClickException("Rules document must be a mapping of class names")

    for class_name, section in data.items():
        if not isinstance(section, dict):
            click.echo(f"{class_name}: (not a mapping)")
            continue
        counts = []
        for kind in RuleKind:
            settings = section.get(kind.section)
            if isinstance(settings, dict):
                counts.append(f"{kind.section}={len(settings)}")
        click.echo(f"{class_name}: {' '.join(counts) if counts else '(no rules)'}")


def _format_value(value: Any) -> str:
    if isinstance(value, Substitution):
        return f"{value.pattern!r} -> {value.replacement!r}"
    return repr(value)
