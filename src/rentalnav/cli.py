"""CLI 入口

对本地保存的列表页 HTML 执行翻页判断与字段提取（不发起任何网络请求）。
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .common.config import config
from .common.document import HtmlDocument
from .common.exceptions import DocumentLoadError, ValidationError
from .common.logger import get_logger, set_log_level, setup_file_logging
from .common.types import KeyEvent, NavigationOutcome
from .common.validators import validate_key_map, validate_url
from .extractor import ListingExtractor
from .navigation import NavigationController, NavigationState

# 日志器
logger = get_logger(__name__)

app = typer.Typer(
    name="rentalnav",
    help="rentalnav CLI - 租房列表页翻页与字段提取",
    add_completion=False,
)
console = Console()


@app.callback()
def main_callback(
    log_level: str = typer.Option("INFO", "--log-level", envvar="LOG_LEVEL", help="日志级别"),
    log_file: Path | None = typer.Option(None, "--log-file", help="同时把调试日志写入该文件"),
):
    """rentalnav - 租房列表页翻页与字段提取"""
    set_log_level(log_level)
    if log_file is not None:
        setup_file_logging(str(log_file))


def _load_document(html_file: Path, url: str) -> HtmlDocument:
    """校验输入并加载文档，失败时打印错误并退出"""
    try:
        url = validate_url(url)
        document = HtmlDocument.from_file(html_file, url)
    except (ValidationError, DocumentLoadError) as e:
        logger.debug(f"[CLI] 输入错误: {e}")
        console.print(Panel(f"[red]{escape(str(e))}[/red]", title="输入错误", style="red"))
        raise typer.Exit(1)
    logger.debug(f"[CLI] 已加载 {html_file} ({url})")
    return document


def _fmt(value: float | str | None, suffix: str = "") -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        value = f"{value:g}"
    return f"{value}{suffix}"


@app.command("status")
def status_command(
    html_file: Path = typer.Argument(..., help="保存的列表页 HTML 文件"),
    url: str = typer.Option(..., "--url", "-u", help="该页面的地址"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
):
    """
    显示翻页状态（当前页、是否首页/末页、上一页/下一页 URL）

    示例:
        rentalnav status page3.html --url "https://www.kleinanzeigen.de/s-wohnung-mieten/seite:3/c203"
    """
    document = _load_document(html_file, url)
    state = NavigationState(document)
    status = state.status()

    if as_json:
        typer.echo(status.model_dump_json(indent=2))
        return

    console.print(
        Panel(
            f"[bold]页码:[/bold] {status.current_page} / {state.settings.page_cap}\n"
            f"[bold]首页:[/bold] {status.at_start}\n"
            f"[bold]末页:[/bold] {status.at_end}\n"
            f"[bold]上一页:[/bold] {status.prev_url or '-'}\n"
            f"[bold]下一页:[/bold] {status.next_url or '-'}",
            title="翻页状态",
            style="cyan",
        )
    )


@app.command("extract")
def extract_command(
    html_file: Path = typer.Argument(..., help="保存的列表页 HTML 文件"),
    url: str = typer.Option(..., "--url", "-u", help="该页面的地址"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
):
    """
    提取页面中所有房源的价格、面积、房间数、邮编与城市
    """
    document = _load_document(html_file, url)
    listings = ListingExtractor(document).extract_page()

    if as_json:
        payload = [
            {**listing.model_dump(), "price_per_sqm": listing.price_per_sqm}
            for listing in listings
        ]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    table = Table(title=f"房源 ({len(listings)})")
    table.add_column("ID", style="dim")
    table.add_column("价格", justify="right")
    table.add_column("面积", justify="right")
    table.add_column("房间", justify="right")
    table.add_column("€/m²", justify="right", style="green")
    table.add_column("邮编")
    table.add_column("城市")
    for listing in listings:
        table.add_row(
            listing.id or "-",
            _fmt(listing.price, " €"),
            _fmt(listing.area, " m²"),
            _fmt(listing.rooms),
            _fmt(listing.price_per_sqm),
            listing.postal_code or "-",
            listing.city or "-",
        )
    console.print(table)


@app.command("press")
def press_command(
    html_file: Path = typer.Argument(..., help="保存的列表页 HTML 文件"),
    url: str = typer.Option(..., "--url", "-u", help="该页面的地址"),
    key: str = typer.Option(..., "--key", "-k", help="模拟按下的键，例如 a 或 d"),
    prev_key: str | None = typer.Option(None, "--prev-key", help="上一页按键（覆盖配置）"),
    next_key: str | None = typer.Option(None, "--next-key", help="下一页按键（覆盖配置）"),
):
    """
    模拟一次快捷键，显示是否会跳转以及跳转目标
    """
    document = _load_document(html_file, url)
    targets: list[str] = []
    controller = NavigationController(NavigationState(document), navigator=targets.append)

    key_map = {name: value for name, value in (("prev", prev_key), ("next", next_key)) if value}
    try:
        key_map = validate_key_map(key_map or None, config.hotkeys.as_key_map())
        controller.enable_shortcuts(key_map)
    except ValidationError as e:
        console.print(Panel(f"[red]{escape(str(e))}[/red]", title="输入错误", style="red"))
        raise typer.Exit(1)

    outcome = controller.handle_key(KeyEvent(key=key))
    style = "green" if outcome is NavigationOutcome.NAVIGATED else "yellow"
    console.print(
        Panel(
            f"[bold]结果:[/bold] {outcome.value}\n"
            f"[bold]目标:[/bold] {targets[0] if targets else '-'}",
            title=f"按键 {key!r}",
            style=style,
        )
    )


def main():
    """CLI 入口点

    供 pyproject.toml 中 [project.scripts] 调用。
    """
    app()


if __name__ == "__main__":
    main()
