"""Match Orders 场景：构造两张互补订单并由第三方账户提交撮合。

流程严格串行，每笔交易都等待上链后再继续：

1. 从钱包读取 maker / taker / 撮合方账户；
2. maker 授权 ZRX、taker 授权 WETH 给 ERC20 proxy；
3. taker 将 ETH 存入 WETH；
4. 构造左右两张订单并分别签名；
5. 打印授权与余额，提交 matchOrders 并等待回执；
6. 打印回执、订单哈希与撮合后的余额。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Protocol, Sequence

from ..clients.context import ScenarioContext
from ..clients.tokens import TokenClient
from ..constants import UNLIMITED_ALLOWANCE_IN_BASE_UNITS
from ..types import DecodedEvent, MatchOrdersResult, SignatureType
from .asset_data import encode_erc20_asset_data
from .order_utils import build_matching_order, build_order, expiration_from_now
from .signing import sign_order

logger = logging.getLogger(__name__)


class ScenarioPrinter(Protocol):
    def print_scenario(self, title: str) -> None: ...

    def print_data(self, header: str, rows: Iterable[Sequence[Any]]) -> None: ...

    def print_transaction(
        self,
        header: str,
        receipt: Mapping[str, Any],
        rows: Iterable[Sequence[Any]] = (),
        events: Iterable[DecodedEvent] = (),
    ) -> None: ...

    async def fetch_and_print_allowances(
        self, owners: Mapping[str, str], tokens: Sequence[TokenClient], spender: str
    ) -> None: ...

    async def fetch_and_print_balances(self, owners: Mapping[str, str], tokens: Sequence[TokenClient]) -> None: ...


@dataclass
class MatchOrdersParams:
    """场景参数，数量均为代币最小单位。

    Attributes:
        maker_asset_amount: 左侧订单卖出的 ZRX 数量。
        taker_asset_amount: 左侧订单想要的 WETH 数量，也是 taker 存入的 WETH。
        right_order_taker_asset_amount: 右侧订单想要的 ZRX 数量。
        order_ttl_seconds: 订单有效期。
        signature_type: 订单签名方式。
        deposit: 是否为 taker 存入 WETH；关闭后撮合会因余额不足失败。
    """

    maker_asset_amount: int = 10
    taker_asset_amount: int = 4
    right_order_taker_asset_amount: int = 2
    order_ttl_seconds: int = 600
    signature_type: SignatureType = SignatureType.ETH_SIGN
    deposit: bool = True


async def run_match_orders(
    ctx: ScenarioContext,
    printer: ScenarioPrinter,
    params: MatchOrdersParams | None = None,
) -> MatchOrdersResult:
    """执行 Match Orders 场景。

    Args:
        ctx: 已连接的场景上下文。
        printer: 输出各阶段数据的打印器。
        params: 场景参数，缺省使用默认数量。

    Returns:
        撮合交易的结果，包含回执与两张已签名订单。

    Raises:
        ValueError: 钱包账户不足三个。
        ChainError: 任一交易回执 status 为 0。
    """
    params = params or MatchOrdersParams()
    printer.print_scenario("Match Orders")

    accounts = await ctx.chain.get_available_addresses()
    if len(accounts) < 3:
        raise ValueError(f"match orders needs 3 accounts (maker, taker, matcher), got {len(accounts)}")
    maker, taker, matcher = accounts[0], accounts[1], accounts[2]
    printer.print_data("Accounts", [("Maker", maker), ("Taker", taker), ("Order Matcher", matcher)])

    # 0x v2 使用 asset data 标识 proxy 类型与代币合约
    maker_asset_data = encode_erc20_asset_data(ctx.zrx_token.address)
    taker_asset_data = encode_erc20_asset_data(ctx.ether_token.address)

    maker_approve_tx = await ctx.zrx_token.approve(ctx.erc20_proxy_address, UNLIMITED_ALLOWANCE_IN_BASE_UNITS, maker)
    await ctx.chain.await_transaction_mined(maker_approve_tx)

    taker_approve_tx = await ctx.ether_token.approve(ctx.erc20_proxy_address, UNLIMITED_ALLOWANCE_IN_BASE_UNITS, taker)
    await ctx.chain.await_transaction_mined(taker_approve_tx)

    setup_rows = [
        (f"Maker {ctx.zrx_token.symbol} Approval", maker_approve_tx),
        (f"Taker {ctx.ether_token.symbol} Approval", taker_approve_tx),
    ]
    if params.deposit:
        deposit_tx = await ctx.ether_token.deposit(params.taker_asset_amount, taker)
        await ctx.chain.await_transaction_mined(deposit_tx)
        setup_rows.append((f"Taker {ctx.ether_token.symbol} Deposit", deposit_tx))
    else:
        logger.warning("Skipping %s deposit for taker %s", ctx.ether_token.symbol, taker)
    printer.print_data("Setup", setup_rows)

    expiration = expiration_from_now(params.order_ttl_seconds)
    left_order = build_order(
        exchange_address=ctx.exchange.address,
        maker_address=maker,
        maker_asset_amount=params.maker_asset_amount,
        taker_asset_amount=params.taker_asset_amount,
        maker_asset_data=maker_asset_data,
        taker_asset_data=taker_asset_data,
        expiration_time_seconds=expiration,
    )
    printer.print_data("Left Order", left_order.as_display_rows())

    right_order = build_matching_order(left_order, taker, params.right_order_taker_asset_amount)
    printer.print_data("Right Order", right_order.as_display_rows())

    left = sign_order(left_order, maker, ctx.wallet, params.signature_type)
    right = sign_order(right_order, taker, ctx.wallet, params.signature_type)

    owners = {"Maker": maker, "Taker": taker}
    balance_owners = {**owners, "Order Matcher": matcher}
    await printer.fetch_and_print_allowances(owners, ctx.tokens, ctx.erc20_proxy_address)
    await printer.fetch_and_print_balances(balance_owners, ctx.tokens)

    tx_hash = await ctx.exchange.match_orders(left_order, right_order, left.signature, right.signature, sender=matcher)
    receipt = await ctx.chain.await_transaction_mined(tx_hash)

    exchange_events = ctx.exchange.decode_logs(receipt)
    token_events = [event for token in ctx.tokens for event in token.decode_logs(receipt)]
    printer.print_transaction(
        "matchOrders",
        receipt,
        [("left orderHash", left.order_hash_hex), ("right orderHash", right.order_hash_hex)],
        [*exchange_events, *token_events],
    )

    await printer.fetch_and_print_balances(balance_owners, ctx.tokens)

    status_rows = []
    for label, signed in (("left", left), ("right", right)):
        status, _, filled = await ctx.exchange.get_order_info(signed.order)
        status_rows.append((f"{label} order", f"{status.name} (taker asset filled: {filled})"))
    printer.print_data("Order Status", status_rows)

    return MatchOrdersResult(
        tx_hash=tx_hash,
        receipt=receipt,
        left=left,
        right=right,
        matcher=matcher,
        filled_order_hashes=[
            str(event.args["orderHash"]).lower() for event in exchange_events if event.name == "Fill"
        ],
        block_number=receipt.get("blockNumber"),
    )
