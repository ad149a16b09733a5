"""账户与余额相关 CLI 子命令。"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click
from rich.table import Table

from ..clients.context import open_context
from ..config import Settings
from ..wallet import MnemonicWallet
from . import main
from .common import RichPrinter, console, load_settings, setup_logging

logger = logging.getLogger(__name__)


@main.command("accounts")
@click.option("--env-file", default=None, type=click.Path(path_type=Path), help="额外加载的 .env 文件。")
def accounts(env_file: Optional[Path]) -> None:
    """列出助记词钱包派生出的账户（不连接节点）。"""
    settings = load_settings(env_file)
    wallet = MnemonicWallet.from_settings(settings)
    roles = {0: "Maker", 1: "Taker", 2: "Order Matcher"}

    table = Table(title="Accounts", header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Address")
    table.add_column("Role", style="magenta")
    for index, address in enumerate(wallet.get_available_addresses()):
        table.add_row(str(index), address, roles.get(index, ""))
    console.print(table)


async def _show_balances(settings: Settings, count: int) -> None:
    async with open_context(settings) as ctx:
        addresses = ctx.wallet.get_available_addresses()[:count]
        owners = {f"#{index}": address for index, address in enumerate(addresses)}
        printer = RichPrinter()
        await printer.fetch_and_print_balances(owners, ctx.tokens)
        await printer.fetch_and_print_allowances(owners, ctx.tokens, ctx.erc20_proxy_address)


@main.command("balances")
@click.option("--count", default=3, show_default=True, type=int, help="展示的账户数量。")
@click.option("--env-file", default=None, type=click.Path(path_type=Path), help="额外加载的 .env 文件。")
def balances(count: int, env_file: Optional[Path]) -> None:
    """展示前若干账户的 ZRX/WETH 余额与 ERC20 proxy 授权额度。"""
    settings = load_settings(env_file)
    setup_logging(settings.log_level)
    try:
        asyncio.run(_show_balances(settings, count))
    except Exception:  # noqa: BLE001
        logger.exception("Failed to fetch balances")
        raise SystemExit(1)


__all__ = ["accounts", "balances"]
