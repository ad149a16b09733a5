"""CLI 通用工具与共享对象。

本模块提供：

- 统一的 Rich `console` 实例与日志初始化；
- 场景输出使用的 `RichPrinter`（账户、订单、交易回执、余额与授权表格）。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..clients.tokens import TokenClient
from ..config import Settings
from ..types import DecodedEvent

console = Console()


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """加载配置；配置非法时转为 click 错误（退出码 1），不输出 traceback。"""
    try:
        return Settings.load(env_file=env_file)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration:\n{exc}") from exc


def setup_logging(level: str = "INFO", target: Optional[Console] = None) -> None:
    """以 RichHandler 初始化根 logger。

    Args:
        level: 日志级别名称，如 ``INFO``。
        target: 输出的 Console，默认使用模块级 ``console``。
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=target or console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


class RichPrinter:
    """按调用顺序输出场景各阶段的数据表格。"""

    def __init__(self, target: Optional[Console] = None):
        self.console = target or console

    def print_scenario(self, title: str) -> None:
        self.console.rule(f"[bold magenta]{title}[/bold magenta]")

    def print_data(self, header: str, rows: Iterable[Sequence[Any]]) -> None:
        """打印键值表格。

        Args:
            header: 表格标题。
            rows: ``(key, value)`` 行，保持传入顺序。
        """
        table = Table(title=header, header_style="bold cyan", show_header=False)
        table.add_column("Key", style="yellow")
        table.add_column("Value", overflow="fold")
        for key, value in rows:
            table.add_row(str(key), str(value))
        self.console.print(table)

    def print_transaction(
        self,
        header: str,
        receipt: Mapping[str, Any],
        rows: Iterable[Sequence[Any]] = (),
        events: Iterable[DecodedEvent] = (),
    ) -> None:
        """打印交易回执摘要、附加信息以及解码后的事件日志。"""
        status = receipt.get("status")
        status_label = "[green]success[/green]" if status == 1 else f"[red]{status}[/red]"
        summary = [
            ("txHash", _hex(receipt.get("transactionHash"))),
            ("blockNumber", receipt.get("blockNumber")),
            ("gasUsed", receipt.get("gasUsed")),
            ("status", status_label),
            *rows,
        ]
        self.print_data(f"Transaction: {header}", summary)

        events = list(events)
        if not events:
            return
        table = Table(title="Logs", header_style="bold cyan", row_styles=["dim", ""])
        table.add_column("Event", style="magenta")
        table.add_column("Contract", overflow="fold")
        table.add_column("Args", overflow="fold")
        for event in events:
            args = "\n".join(f"{key}: {value}" for key, value in event.args.items())
            table.add_row(event.name, event.address, args)
        self.console.print(table)

    async def fetch_and_print_allowances(
        self, owners: Mapping[str, str], tokens: Sequence[TokenClient], spender: str
    ) -> None:
        """查询各账户对 ``spender`` 的授权额度并打印。"""
        table = Table(title="Allowances", header_style="bold cyan")
        table.add_column("Token", style="magenta")
        for label in owners:
            table.add_column(label, justify="right", overflow="fold")
        for token in tokens:
            values = [str(await token.allowance(owner, spender)) for owner in owners.values()]
            table.add_row(token.symbol, *values)
        self.console.print(table)

    async def fetch_and_print_balances(self, owners: Mapping[str, str], tokens: Sequence[TokenClient]) -> None:
        table = Table(title="Balances", header_style="bold cyan")
        table.add_column("Token", style="magenta")
        for label in owners:
            table.add_column(label, justify="right")
        for token in tokens:
            values = [str(await token.balance_of(owner)) for owner in owners.values()]
            table.add_row(token.symbol, *values)
        self.console.print(table)


def _hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


__all__ = ["console", "load_settings", "setup_logging", "RichPrinter"]
