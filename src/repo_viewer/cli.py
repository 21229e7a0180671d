"""CLI for Repo Viewer."""

import sys

import click

from repo_viewer.config.logging import configure_logging


def _create_services():
    from repo_viewer.api.dependencies import create_services
    from repo_viewer.config.settings import get_settings

    return create_services(get_settings())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """Repo Viewer: mirror git repositories and browse them read-only."""
    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(log_level=log_level)


@cli.command()
def serve() -> None:
    """Run the HTTP server with periodic background sync."""
    from repo_viewer.api.main import run

    run()


@cli.command()
def sync() -> None:
    """Reload the config and clone or pull every repository once."""
    _, refresh_service = _create_services()
    results = refresh_service.refresh()

    if not results:
        click.echo("No repositories configured.")
        return

    for result in results:
        line = f"  [{result.outcome.value:>10}] {result.repo_name}"
        if result.commit:
            line += f" @ {result.commit[:8]}"
        if result.error:
            line += f": {result.error}"
        click.echo(line)

    if any(not r.ok for r in results):
        sys.exit(1)


@cli.command()
def repos() -> None:
    """Show the configured repositories with their normalized URLs."""
    from repo_viewer.config.settings import get_settings
    from repo_viewer.core.exceptions import ConfigError
    from repo_viewer.registry.store import ConfigStore

    settings = get_settings()
    store = ConfigStore(settings.config_file, default_host=settings.default_host)
    try:
        registry = store.load()
    except ConfigError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    for name in registry.names:
        repo = registry.repositories[name]
        click.echo(f"  {name}: {repo.url}")
        click.echo(f"    local: {repo.browse_root(settings.storage_root)}")


@cli.command()
@click.argument("repo")
@click.argument("path", default="")
@click.option("--raw", is_flag=True, help="Treat the file as raw bytes")
def show(repo: str, path: str, raw: bool) -> None:
    """Resolve PATH inside REPO and print how it would be presented."""
    from repo_viewer.core.exceptions import InternalError, NotFoundError
    from repo_viewer.core.models.browse import Presentation

    browsing_service, refresh_service = _create_services()
    refresh_service.reload_config()

    try:
        result = browsing_service.browse(repo, path, raw=raw)
    except NotFoundError as e:
        click.echo(f"Not found: {e.message}", err=True)
        sys.exit(1)
    except InternalError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)

    click.echo(" / ".join(crumb.name for crumb in result.breadcrumbs))
    if result.presentation == Presentation.DIRECTORY:
        for entry in result.entries:
            click.echo(f"  {entry.name}/" if entry.is_directory else f"  {entry.name}")
    elif result.presentation == Presentation.TEXT:
        click.echo(f"[{result.classification.language}]")
        click.echo(browsing_service.read_text(result.resolution))
    else:
        click.echo(f"[{result.presentation.value}] {result.resolution.absolute_path}")


if __name__ == "__main__":
    cli()
