#!/usr/bin/env python3
"""
Command line entry point of SitemapGen.

Commands:
  crawl     Crawl the site and write sitemap.xml
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config file (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (console only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --site, -t URL      Site root URL (env: SITE_URI)
  --exclude, -x PATH  Path prefix to skip, repeatable
  --output, -o PATH   Sitemap destination (default: sitemap.xml)
  --json, -j PATH     Also save a JSON crawl report
  --max-redirects N   Redirect hops followed per request (default: 5)
  --timeout SEC       Per-request timeout (none by default)

Other:
  --version, -v       Show SitemapGen version

Example:
  sitemap-gen crawl --site https://example.com -x /admin -x /tmp -o public/sitemap.xml
"""
import sys
import asyncio
from pathlib import Path

import click

from sitemap_gen import __version__
from sitemap_gen.config import load_config
from sitemap_gen.logger import DEFAULT_FORMAT, init_logging
from sitemap_gen.engine import start_crawl
from sitemap_gen.report.json_report import render_json
from sitemap_gen.report.sitemap_xml import render_sitemap

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _site_options(func):
    func = click.option(
        '--exclude', '-x', 'exclude',
        multiple=True,
        help='Path prefix excluded from the crawl (repeatable)'
    )(func)
    func = click.option(
        '--site', '-t', 'site',
        envvar='SITE_URI',
        default=None,
        help='Root URL of the site to crawl'
    )(func)
    return func


def _load(ctx, **overrides):
    if overrides.get('exclude') == ():
        overrides['exclude'] = None
    try:
        return load_config(ctx.obj['config_path'], overrides)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapGen, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (console only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SitemapGen command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@_site_options
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Sitemap destination [default: sitemap.xml]'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Save a JSON crawl report to this file'
)
@click.option(
    '--max-redirects', 'max_redirects',
    type=int,
    default=None,
    help='Redirect hops followed per request [default: 5]'
)
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Per-request timeout in seconds'
)
@click.pass_context
def crawl(ctx, site, exclude, output, json_output, max_redirects, timeout):
    """Crawl the site and write its sitemap."""
    cfg = _load(
        ctx,
        base_url=site,
        exclude=exclude,
        output=output,
        max_redirects=max_redirects,
        timeout=timeout,
    )
    click.echo(f'Target site: {cfg.base_url}')
    if cfg.exclude:
        click.echo(f'Excludes: {", ".join(sorted(cfg.exclude))}')

    try:
        report = asyncio.run(start_crawl(cfg))
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    try:
        saved = render_sitemap(
            report.visited,
            cfg.base_url,
            cfg.output,
            changefreq=cfg.changefreq,
            priority=cfg.priority,
        )
    except OSError as e:
        print_error(f'Failed to write sitemap: {e}')
    click.echo(f'Sitemap: {saved} ({len(report.visited)} urls)')

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to write JSON report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@_site_options
@click.pass_context
def show_config(ctx, site, exclude):
    """Print the effective configuration as JSON."""
    cfg = _load(ctx, base_url=site, exclude=exclude)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
