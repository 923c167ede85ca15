# === FILE: link_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point of LinkScout.

Commands:
  check     Fetch a page and report which of its links are dead
  dump      Fetch a page and write the links found on it to a file

Common options:
  --config PATH       YAML/JSON file with default settings
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Log line format

Extra:
  --version, -v       Show the LinkScout version

Example:
  link-scout check example.com -p 8 --show-ok --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from link_scout import __version__
from link_scout.config import CheckConfig, DumpConfig, build_config
from link_scout.engine import check_links, dump_links
from link_scout.errors import LinkScoutError
from link_scout.logger import DEFAULT_FORMAT, configure
from link_scout.report.console import ConsoleReporter
from link_scout.report.html_report import render_html
from link_scout.report.json_report import render_json
from link_scout.report.links_file import write_links

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', bold=True, err=True)
    sys.exit(1)


def _load(ctx, model, overrides):
    try:
        return build_config(model, ctx.obj['config_path'], overrides)
    except (LinkScoutError, ValidationError, OSError, ValueError, TypeError) as e:
        print_error(f'Configuration error: {e}')


def _common_options(func):
    """Options shared by check and dump."""
    func = click.argument('url', required=False)(func)
    func = click.option(
        '--user-agent', '-u', 'user_agent',
        default=None,
        help='Custom User-Agent string'
    )(func)
    func = click.option(
        '--timeout', '-t', 'timeout',
        type=float, default=None,
        help='Per-request timeout in seconds [default: 10]'
    )(func)
    func = click.option(
        '--ignore', '-i', 'ignore_pattern',
        default=None,
        help='Regex; links matching it are not checked'
    )(func)
    func = click.option(
        '--keep-fragments', 'keep_fragments',
        is_flag=True,
        help='Treat links differing only in #fragment as distinct'
    )(func)
    func = click.option(
        '--insecure', 'insecure',
        is_flag=True,
        help='Do not verify TLS certificates'
    )(func)
    return func


def _overrides(url, user_agent, timeout, ignore_pattern, keep_fragments, insecure, **extra):
    return {
        'url': url,
        'user_agent': user_agent,
        'timeout': timeout,
        'ignore_pattern': ignore_pattern,
        'truncate_fragments': False if keep_fragments else None,
        'verify_tls': False if insecure else None,
        **extra,
    }


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON file with default settings'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Log line format'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """LinkScout finds dead links on a web page, or dumps the links it finds."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@_common_options
@click.option(
    '--n-par', '-p', 'concurrency',
    type=click.IntRange(min=1), default=None,
    help='Parallel requests per domain [default: 4]'
)
@click.option(
    '--show-ok', '-s', 'show_ok',
    is_flag=True,
    help='Also show links that are ok'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report to this file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report to this file'
)
@click.option(
    '--no-progress', 'no_progress',
    is_flag=True,
    help='Hide the progress bar'
)
@click.pass_context
def check(ctx, concurrency, show_ok, json_output, html_output, no_progress, **common):
    """Check every link on the page at URL."""
    cfg = _load(ctx, CheckConfig, _overrides(concurrency=concurrency, show_ok=show_ok or None, **common))
    reporter = ConsoleReporter(cfg.show_ok, show_progress=not no_progress)
    try:
        result = asyncio.run(check_links(cfg, reporter))
    except LinkScoutError as e:
        print_error(str(e))

    if json_output:
        try:
            saved_json = render_json(result, cfg.url, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Could not save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(result, cfg.url, html_output)
            click.echo(f'HTML report: {saved_html}')
        except OSError as e:
            print_error(f'Could not save HTML report: {e}')


@cli.command('dump', context_settings=CONTEXT_SETTINGS)
@_common_options
@click.option(
    '--output', '-o', 'output_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='File to write the links to'
)
@click.pass_context
def dump(ctx, output_file, **common):
    """Write the links found on the page at URL to a file."""
    cfg = _load(ctx, DumpConfig, _overrides(output_file=output_file, **common))
    try:
        links, stats = asyncio.run(dump_links(cfg))
    except LinkScoutError as e:
        print_error(str(e))

    try:
        saved = write_links(links, cfg.output_file)
    except OSError as e:
        print_error(f'Could not write links: {e}')
    click.echo(f'Wrote {stats.unique} links to {saved}')


if __name__ == "__main__":
    cli()
