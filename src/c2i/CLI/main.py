"""
Command Line Interface for C2I.
"""
import logging
import click
import yaml
from ..MODELS.chart_version import OSType
from ..MODELS.image_set import ImageSet
from ..RESOLVERS.chart_resolver import SystemCharts
from ..RESOLVERS.chart_selector import get_chart_versions
from ..RESOLVERS.resolve import get_images
from ..UTILS.settings import load_settings
from ..exceptions import C2IError

OS_CHOICE = click.Choice([t.value for t in OSType])

CLI_ERRORS = (C2IError, OSError, yaml.YAMLError)


def _write_lines(path, lines):
    with open(path, 'w') as f:
        for line in lines:
            f.write(line + "\n")


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--env-file', type=click.Path(dir_okay=False), default=None, help='Read C2I_* settings from a .env file')
@click.pass_context
def cli(ctx, verbose, env_file):
    """
    C2I - Charts to Images.

    Lists every container image a platform release needs, so that it can be
    mirrored to a private registry.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    ctx.ensure_object(dict)
    ctx.obj['settings'] = load_settings(env_file)


@cli.command()
@click.option('--system-charts', 'system_charts', type=click.Path(exists=True, file_okay=False), help='System chart repository')
@click.option('--charts', type=click.Path(exists=True, file_okay=False), help='Chart repository')
@click.option('--version', 'target_version', required=True, help='Platform version to resolve images for')
@click.option('--os', 'os_name', type=OS_CHOICE, default=OSType.LINUX.value, show_default=True)
@click.option('--image', 'images', multiple=True, help='Extra image (source "rancher")')
@click.option('--k3s-upgrade-image', 'k3s_images', multiple=True, help='Image used by k3s upgrades')
@click.option('--system-images', 'system_images_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML or JSON file of system image collections')
@click.option('--registry', default=None, help='Private registry to prefix images with')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the image list to a file')
@click.option('--sources-output', type=click.Path(dir_okay=False), help='Write images with their sources to a file')
@click.pass_context
def export(ctx, system_charts, charts, target_version, os_name, images, k3s_images, system_images_file,
           registry, output, sources_output):
    """Resolve the images of a release."""
    settings = ctx.obj['settings']
    if registry is None:
        registry = settings.system_default_registry

    try:
        system_images = None
        if system_images_file:
            with open(system_images_file, 'r') as f:
                system_images = yaml.safe_load(f)

        image_list, sources_list = get_images(
            system_charts, charts, target_version,
            k3s_upgrade_images=list(k3s_images),
            images_from_args=list(images),
            system_images=system_images,
            os_type=OSType(os_name),
            settings=settings,
            registry=registry,
        )
    except CLI_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if sources_output:
        _write_lines(sources_output, sources_list)
    if output:
        _write_lines(output, image_list)
    else:
        for image in image_list:
            click.echo(image)


@cli.command()
@click.argument('repository', type=click.Path(exists=True, file_okay=False))
@click.option('--version', 'target_version', required=True, help='Platform version')
@click.option('--ranged/--latest', default=None, help='Force range based or latest-only selection')
def charts(repository, target_version, ranged):
    """List the chart versions images are picked from."""
    try:
        versions = get_chart_versions(repository, target_version, ranged=ranged)
    except CLI_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    for version in sorted(versions, key=lambda v: (v.name, v.version)):
        click.echo(version.identity)


@cli.command(name='system-charts')
@click.argument('repository', type=click.Path(exists=True, file_okay=False))
@click.option('--version', 'target_version', required=True, help='Platform version')
@click.option('--os', 'os_name', type=OS_CHOICE, default=OSType.LINUX.value, show_default=True)
def system_charts_cmd(repository, target_version, os_name):
    """Resolve images of the system charts whose declared range matches the version."""
    image_set = ImageSet()
    try:
        SystemCharts(target_version, repository, OSType(os_name)).fetch_images(image_set)
    except CLI_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    _, sources_list = image_set.to_lists()
    for line in sources_list:
        click.echo(line)


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
