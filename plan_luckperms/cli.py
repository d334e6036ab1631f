import asyncio
from importlib import metadata
from pathlib import Path
from uuid import UUID

import click
import colorama
import tomli
from colorama import Fore, Style
from pydantic import ValidationError

from .config import ConfigManager, get_config
from .extension import ExtensionService, ProviderResult, Table
from .luckperms import LuckPermsProvider, SnapshotError, SnapshotRegistry
from .luckperms_extension import LuckPermsExtension, register_extension

colorama.just_fix_windows_console()


def warn(message: str):
    return f"{Fore.YELLOW}[!]{Style.RESET_ALL} {message}"


def info(message: str):
    return f"{Fore.GREEN}[+]{Style.RESET_ALL} {message}"


def error(message: str):
    return f"{Fore.RED}[-]{Style.RESET_ALL} {message}"


def success(message: str):
    return f"{Fore.GREEN}[+]{Style.RESET_ALL} {message}"


def _render_table(table: Table) -> list[str]:
    lines = ["  " + " | ".join(table.column_names)]
    lines.extend(
        "  " + " | ".join("-" if v is None else v for v in row) for row in table.rows
    )
    if table.is_empty():
        lines.append("  (empty)")
    return lines


def _render(result: ProviderResult) -> str:
    title = result.provider.text or result.provider.name
    value = result.value
    if isinstance(value, Table):
        return "\n".join([f"{title}:", *_render_table(value)])
    if isinstance(value, list):
        return f"{title}: {', '.join(value) if value else '(none)'}"
    return f"{title}: {value}"


def _echo_results(kind: str, results: dict[str, ProviderResult]):
    """输出某一目标类型的全部结果，未就绪的访问器标记为等待中"""
    extension = ExtensionService().get_extension(LuckPermsExtension.info().name)
    if extension is None:
        raise click.ClickException("LuckPerms extension is not registered")
    for name, provider in extension.providers.items():
        if provider.target != kind or name in get_config().disabled_providers:
            continue
        key = f"{extension.name}.{name}"
        if key in results:
            click.echo(_render(results[key]))
        else:
            click.echo(warn(f"{provider.text or name}: pending"))


async def _prepare(snapshot: Path, config_path: Path | None):
    if config_path is not None:
        await ConfigManager().load(config_path)
    registry = await SnapshotRegistry.from_file(snapshot)
    LuckPermsProvider().register(registry)
    ExtensionService().unregister(LuckPermsExtension.info().name)
    register_extension()


def _load(snapshot: Path, config_path: Path | None):
    try:
        asyncio.run(_prepare(snapshot, config_path))
    except SnapshotError as e:
        raise click.ClickException(str(e)) from e
    except ValidationError as e:
        raise click.ClickException(f"Invalid config file: {e}") from e
    except tomli.TOMLDecodeError as e:
        raise click.ClickException(f"Invalid config TOML: {e}") from e


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file to load",
)
snapshot_argument = click.argument(
    "snapshot", type=click.Path(path_type=Path, exists=True, dir_okay=False)
)


@click.group()
def cli():
    """plan-luckperms - inspect LuckPerms data as Plan would render it"""
    pass


@cli.command()
def version():
    """Print the version number."""
    try:
        click.echo(f"plan-luckperms version: {metadata.version('plan-luckperms')}")
    except metadata.PackageNotFoundError:
        click.echo(error("plan-luckperms is not installed properly"))
    try:
        click.echo(f"NoneBot version: {metadata.version('nonebot2')}")
    except metadata.PackageNotFoundError:
        click.echo(warn("NoneBot is not installed"))


@cli.command()
def providers():
    """List the data providers of the extension."""
    ext_info = LuckPermsExtension.info()
    click.echo(info(f"{ext_info.name} ({ext_info.icon.name}, {ext_info.color.value})"))
    for name, provider in LuckPermsExtension.providers.items():
        click.echo(
            f"  {name:<18} {provider.kind:<6} {provider.target:<6} "
            f"tab={provider.tab or '-'} text={provider.text or '-'}"
        )


@cli.command()
@snapshot_argument
@click.argument("unique_id", type=click.UUID)
@config_option
def player(snapshot: Path, unique_id: UUID, config_path: Path | None):
    """Show the player data of UNIQUE_ID."""
    _load(snapshot, config_path)
    _echo_results("player", ExtensionService().extract_player_data(unique_id))


@cli.command()
@snapshot_argument
@click.argument("name")
@config_option
def group(snapshot: Path, name: str, config_path: Path | None):
    """Show the data of permission group NAME."""
    _load(snapshot, config_path)
    _echo_results("group", ExtensionService().extract_group_data(name))


@cli.command()
@snapshot_argument
@config_option
def server(snapshot: Path, config_path: Path | None):
    """Show the server wide data."""
    _load(snapshot, config_path)
    _echo_results("server", ExtensionService().extract_server_data())
    click.echo(success("Done"))


def main():
    cli()


if __name__ == "__main__":
    main()
