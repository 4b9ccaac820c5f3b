from __future__ import annotations
from typing import Optional

import click

from vscan.vscanner.interfaces import ConfigurationError, OutputFormat
from vscan.vscanner.logger import init_logger
from vscan.vscanner.pluginload import PluginLoader
from vscan.vscanner.preferences import (
    LOG_PLUGINS_AT_LOAD,
    PLUGINS_FOLDER,
    Preferences,
)
from vscan.vscanner.records import plugins_free, plugins_set_socket
from vscan.vscanner.report import output_report

from rich.console import Console
from rich.table import Table
from rich import box

console = Console()


def build_preferences(
    config_path: Optional[str],
    plugins_folder: Optional[str] = None,
    log_plugins: bool = False,
) -> Preferences:
    """
    설정 파일 + CLI 옵션 -> Preferences
    CLI 옵션이 설정 파일 값보다 우선
    """
    try:
        preferences = Preferences.load(config_path) if config_path else Preferences()
    except ConfigurationError as e:
        raise click.ClickException(e.message)

    return preferences.merged(
        **{
            PLUGINS_FOLDER: plugins_folder,
            LOG_PLUGINS_AT_LOAD: "yes" if log_plugins else None,
        }
    )


# CLI Root
@click.group()
def cli():
    """vscan plugin loader CLI"""


# load 명령어
@cli.command("load")
@click.option("-c", "--config", "config_path", help="Config file (JSON or key = value) / 설정 파일 경로")
@click.option("-f", "--plugins-folder", help="Plugin folder, overrides config / 플러그인 디렉토리")
@click.option("-q", "--quiet", is_flag=True, help="No progress output / 진행 상황 출력 안 함")
@click.option("--socket", "socket_fd", type=int, help="Socket descriptor to bind to every plugin")
@click.option("--log-plugins", is_flag=True, help="Log each file name at load / 파일별 로드 로그")
@click.option("-o", "--output", help="Output file path (e.g., plugins.json) / 결과 출력 파일 경로")
@click.option(
    "--output-format",
    type=click.Choice([fmt.value for fmt in OutputFormat], case_sensitive=False),
    default=OutputFormat.CONSOLE.value,
    show_default=True,
    help="Output format / 결과 출력 형식 (JSON, CONSOLE)",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging / 상세 로그 출력")
@click.option("--log-file", help="Log file path / 로그 파일 경로")
def load(
    config_path,
    plugins_folder,
    quiet,
    socket_fd,
    log_plugins,
    output,
    output_format,
    verbose,
    log_file,
):
    logger = init_logger(verbose, log_file)
    preferences = build_preferences(config_path, plugins_folder, log_plugins)

    loader = PluginLoader(console=console, logger=logger.getChild("pluginload"))
    collection = loader.plugins_init(preferences, quiet=quiet)
    summary = loader.last_summary

    if socket_fd is not None:
        plugins_set_socket(collection, socket_fd)
        logger.debug("Socket %d bound to %d plugin(s).", socket_fd, len(collection))

    try:
        text = output_report(
            collection,
            OutputFormat(output_format.upper()),
            summary=summary,
            path=output,
            verbose=verbose,
        )
        if not output:
            click.echo(text)
        else:
            logger.info("Plugin report written to %s", output)
    finally:
        plugins_free(collection)

    if summary is not None and summary.error:
        raise click.exceptions.Exit(1)


# classes 명령어
@cli.command("classes")
@click.option("-c", "--config", "config_path", help="Config file (JSON or key = value) / 설정 파일 경로")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging / 상세 로그 출력")
def classes(config_path, verbose):
    init_logger(verbose)
    preferences = build_preferences(config_path)

    loader = PluginLoader(console=console)
    active = loader.registry.initialize(preferences)

    table = Table(
        title="🧩 Plugin Classes",
        title_style="bold cyan",
        box=box.MINIMAL_HEAVY_HEAD,
        header_style="bold white",
    )
    table.add_column("Priority", justify="right")
    table.add_column("Class")
    table.add_column("Extension")
    table.add_column("Status", justify="center")
    table.add_column("Description")

    for idx, plugin_class in enumerate(loader.registry.candidates, start=1):
        enabled = plugin_class in active
        table.add_row(
            str(idx),
            plugin_class.name,
            plugin_class.extension,
            "[green]active[/green]" if enabled else "[red]disabled[/red]",
            plugin_class.description or "-",
        )
    console.print(table)


if __name__ == "__main__":
    cli()
