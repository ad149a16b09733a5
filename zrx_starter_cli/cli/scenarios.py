"""0x v2 场景相关 CLI 子命令。"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click

from ..clients.context import open_context
from ..config import Settings
from ..services.match_orders import MatchOrdersParams, run_match_orders
from ..storage import log_matches, match_record
from ..types import MatchOrdersResult, SignatureType
from . import main
from .common import RichPrinter, console, load_settings, setup_logging

logger = logging.getLogger(__name__)

_SIGNATURE_TYPES = {
    "eth_sign": SignatureType.ETH_SIGN,
    "eip712": SignatureType.EIP712,
}


async def _match_orders(settings: Settings, params: MatchOrdersParams) -> MatchOrdersResult:
    """连接节点执行一次撮合场景；无论成功与否都会释放 provider。"""
    async with open_context(settings) as ctx:
        return await run_match_orders(ctx, RichPrinter(), params)


@main.command("match-orders")
@click.option("--maker-amount", default=10, show_default=True, type=int, help="左侧订单卖出的 ZRX 数量（最小单位）。")
@click.option("--taker-amount", default=4, show_default=True, type=int, help="左侧订单想要的 WETH 数量（最小单位）。")
@click.option(
    "--right-taker-amount",
    default=2,
    show_default=True,
    type=int,
    help="右侧订单想要的 ZRX 数量（最小单位）。",
)
@click.option("--ttl", default=None, type=int, help="订单有效期（秒），缺省读取 ORDER_TTL_SECONDS。")
@click.option(
    "--signature-type",
    default="eth_sign",
    show_default=True,
    type=click.Choice(sorted(_SIGNATURE_TYPES)),
    help="订单签名方式。",
)
@click.option("--skip-deposit", is_flag=True, default=False, help="跳过 taker 的 WETH 存入（用于演示余额不足失败）。")
@click.option("--env-file", default=None, type=click.Path(path_type=Path), help="额外加载的 .env 文件。")
def match_orders(
    maker_amount: int,
    taker_amount: int,
    right_taker_amount: int,
    ttl: Optional[int],
    signature_type: str,
    skip_deposit: bool,
    env_file: Optional[Path],
) -> None:
    """撮合两张互补的 ZRX/WETH 订单，并打印前后余额。"""
    settings = load_settings(env_file)
    setup_logging(settings.log_level)
    params = MatchOrdersParams(
        maker_asset_amount=maker_amount,
        taker_asset_amount=taker_amount,
        right_order_taker_asset_amount=right_taker_amount,
        order_ttl_seconds=ttl if ttl is not None else settings.order_ttl_seconds,
        signature_type=_SIGNATURE_TYPES[signature_type],
        deposit=not skip_deposit,
    )
    try:
        result = asyncio.run(_match_orders(settings, params))
    except Exception:  # noqa: BLE001
        logger.exception("Match orders scenario failed")
        raise SystemExit(1)

    if settings.record_matches:
        path = log_matches(settings.ensure_data_dir(), [match_record(result)])
        console.print(f"[dim]Recorded match in {path}[/dim]")


__all__ = ["match_orders"]
