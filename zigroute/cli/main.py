"""
ZIGROUTE CLI Commands

Generate and match URLs against a JSON route list from the command line.

Examples:
    zigroute --config routes.json list
    zigroute --config routes.json url posts.show -p post=4 -p page=2
    zigroute --config routes.json url posts.show --interactive
    zigroute --config routes.json match /posts/4
"""

import json
import sys

import click

from zigroute.cli._template_loader import jinja_env
from zigroute.cli.helpers import load_router, parse_param_options, prompt_missing_params
from zigroute.config import HttpMethod
from zigroute.errors import ZigrouteError
from zigroute.logging import VALID_LOG_LEVELS, setup_logging


def _version_callback(ctx, param, value):
    """Display version and exit."""
    if value:
        from zigroute import __version__
        click.echo(f'ZIGROUTE CLI v{__version__}')
        ctx.exit()


def _fail(error: Exception):
    click.secho(f"[ERROR] {error}", fg='red', bold=True, err=True)
    sys.exit(1)


def _router(ctx):
    try:
        return load_router(ctx.obj.get('config_path'))
    except (ValueError, OSError) as e:
        _fail(e)


@click.group()
@click.option('--version', '-V', is_flag=True, callback=_version_callback, expose_value=False, is_eager=True, help='Show version and exit')
@click.option('--config', 'config_path', default=None,
              type=click.Path(exists=True, dir_okay=False),
              help='JSON route list (Ziggy payload or router config). Defaults to $ZIGROUTE_CONFIG.')
@click.option('--log-level', default='WARNING',
              type=click.Choice(VALID_LOG_LEVELS, case_sensitive=False),
              help='Logging level')
@click.pass_context
def cli(ctx, config_path, log_level):
    """
    ZIGROUTE CLI - Named routes from the command line
    """
    setup_logging(level=log_level)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command()
@click.argument('name')
@click.option('--param', '-p', 'params', multiple=True,
              help='Route parameter: VALUE (positional) or KEY=VALUE. Repeat a key to pass a list.')
@click.option('--absolute/--relative', default=None,
              help='Generate an absolute or relative URL (default: config setting)')
@click.option('--interactive', '-i', is_flag=True, default=False,
              help='Prompt for required parameters that were not given')
@click.pass_context
def url(ctx, name, params, absolute, interactive):
    """
    Generate the URL of route NAME.

    Examples:
        zigroute url posts.index
        zigroute url posts.show -p 4
        zigroute url posts.show -p post=4 -p tags=a -p tags=b
    """
    router = _router(ctx)
    values = parse_param_options(params)

    try:
        if interactive:
            values = prompt_missing_params(router.get(name), values)
        click.echo(router.compile(name, values, absolute))
    except ZigrouteError as e:
        _fail(e)


@cli.command()
@click.argument('url')
@click.option('--show-params', is_flag=True, default=False,
              help='Also print the segment values captured from URL as JSON')
@click.pass_context
def match(ctx, url, show_params):
    """
    Print the name of the route matching URL.

    Exits with status 1 when no route matches.
    """
    router = _router(ctx)
    route = router.parse(url)

    if route is None:
        click.secho(f"[WARNING] No route matches {url}", fg='yellow', err=True)
        sys.exit(1)

    click.echo(route.name())
    if show_params:
        click.echo(json.dumps(route.extract_params(url), indent=2))


@cli.command(name='list')
@click.option('--method', '-m', default=None,
              type=click.Choice([method.value for method in HttpMethod], case_sensitive=False),
              help='Only show routes accepting this HTTP method')
@click.pass_context
def list_routes(ctx, method):
    """
    List the routes of the route list in declaration order.
    """
    router = _router(ctx)

    rows = []
    for name, route in router.routes.items():
        methods = [m.value for m in route.definition.methods]
        if method and method.upper() not in methods:
            continue
        rows.append({
            'name': name,
            'methods': "|".join(methods),
            'uri': route.template,
        })

    widths = {
        'name': max([len("NAME")] + [len(row['name']) for row in rows]),
        'methods': max([len("METHODS")] + [len(row['methods']) for row in rows]),
    }

    template = jinja_env.get_template("route_list.txt.j2")
    click.echo(template.render(routes=rows, widths=widths).rstrip("\n"))


if __name__ == '__main__':
    cli()
