"""
Command Line Interface for godockerize.
"""
import click
from .. import __version__
from ..MANAGERS.build_orchestrator import BuildOrchestrator, DEFAULT_BASE_IMAGE
from ..MODELS.project_config import ProjectConfig
from ..PARSERS.config_parser import ConfigParser, DEFAULT_CONFIG_FILE
from ..PARSERS.env_parser import EnvParser
from ..UTILS.errors import GodockerizeError

@click.group()
@click.version_option(__version__, prog_name='godockerize')
@click.option('--config', '-c', default=DEFAULT_CONFIG_FILE, help='Project config file path')
@click.pass_context
def cli(ctx, config):
    """
    godockerize - build Docker images from Go packages.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config

def load_project_config(ctx) -> ProjectConfig:
    """
    Loads the project config file named by the group's `--config` option.
    """
    try:
        return ConfigParser().load(ctx.obj.get('config_path'))
    except GodockerizeError as e:
        raise click.ClickException(str(e))

@cli.command(short_help='build a Docker image from Go packages')
@click.option('--tag', '-t', default=None,
              help="Output Docker image name and optionally a tag in the 'name:tag' format")
@click.option('--base', default=None, help=f'Base Docker image name [default: {DEFAULT_BASE_IMAGE}]')
@click.option('--env', multiple=True, help='Additional environment variables for the Dockerfile')
@click.option('--env-file', multiple=True, type=click.Path(exists=True, dir_okay=False),
              help='.env file whose variables are added to the Dockerfile')
@click.option('--dry-run', is_flag=True, help='Only print generated Dockerfile')
@click.argument('packages', nargs=-1)
@click.pass_context
def build(ctx, tag, base, env, env_file, dry_run, packages):
    """
    Build compiles and installs the packages by the import paths to
    /usr/local/bin in the docker image. The first package is used as the
    entrypoint.
    """
    if not packages:
        raise click.UsageError('"godockerize build" requires 1 or more arguments', ctx=ctx)

    project = load_project_config(ctx)
    seed_env = list(project.env) + list(env)
    for path in env_file:
        seed_env.extend(EnvParser.parse_tokens(path))

    orchestrator = ctx.obj.get('orchestrator') or BuildOrchestrator()
    try:
        orchestrator.build(
            list(packages),
            base_image=base or project.base or DEFAULT_BASE_IMAGE,
            env=seed_env,
            tag=tag or project.tag,
            dry_run=dry_run,
        )
    except GodockerizeError as e:
        raise click.ClickException(str(e))

def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={}, auto_envvar_prefix='GODOCKERIZE')

if __name__ == '__main__':
    main()
