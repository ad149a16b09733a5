"""Match Orders 场景编排测试：使用内存中的链、代币与 Exchange 替身。"""

from __future__ import annotations

import asyncio
import io
from collections import defaultdict
from typing import Any, Optional

import pytest
from rich.console import Console

from zrx_starter_cli.cli.common import RichPrinter
from zrx_starter_cli.clients import context as context_module
from zrx_starter_cli.clients.context import ScenarioContext, open_context
from zrx_starter_cli.clients.exchange import OrderStatus
from zrx_starter_cli.config import Settings
from zrx_starter_cli.constants import (
    GANACHE_ERC20_PROXY_ADDRESS,
    GANACHE_ETHER_TOKEN_ADDRESS,
    GANACHE_EXCHANGE_ADDRESS,
    GANACHE_ZRX_TOKEN_ADDRESS,
    TX_DEFAULTS,
)
from zrx_starter_cli.services.match_orders import MatchOrdersParams, run_match_orders
from zrx_starter_cli.services.order_utils import get_order_hash_hex
from zrx_starter_cli.services.signing import is_valid_signature
from zrx_starter_cli.types import DecodedEvent, Order, SignatureType
from zrx_starter_cli.wallet import MnemonicWallet


class FakeChain:
    def __init__(self, wallet: MnemonicWallet):
        self.wallet = wallet
        self.receipts: dict[str, dict[str, Any]] = {}
        self.mined: list[str] = []
        self.close_calls = 0
        self.connected = False

    async def connect(self) -> int:
        self.connected = True
        return 50

    async def get_available_addresses(self) -> list[str]:
        return self.wallet.get_available_addresses()

    def record(self, name: str, sender: str) -> str:
        self.wallet.account_for(sender)
        index = len(self.receipts) + 1
        tx_hash = f"0x{index:064x}"
        self.receipts[tx_hash] = {
            "name": name,
            "from": sender,
            "transactionHash": bytes.fromhex(tx_hash[2:]),
            "blockNumber": index,
            "gasUsed": 50000,
            "status": 1,
        }
        return tx_hash

    async def await_transaction_mined(self, tx_hash: str, timeout: Optional[float] = None) -> dict[str, Any]:
        receipt = self.receipts[tx_hash]
        self.mined.append(receipt["name"])
        return receipt

    async def close(self) -> None:
        self.close_calls += 1


class FakeToken:
    def __init__(self, chain: FakeChain, address: str, symbol: str):
        self.chain = chain
        self.address = address
        self.symbol = symbol
        self.balances: dict[str, int] = defaultdict(int)
        self.allowances: dict[tuple[str, str], int] = defaultdict(int)

    async def approve(self, spender: str, amount: int, sender: str, tx_options=None) -> str:
        self.allowances[(sender, spender)] = amount
        return self.chain.record(f"{self.symbol}.approve", sender)

    async def deposit(self, amount: int, sender: str, tx_options=None) -> str:
        self.balances[sender] += amount
        return self.chain.record(f"{self.symbol}.deposit", sender)

    async def balance_of(self, owner: str) -> int:
        return self.balances[owner]

    async def allowance(self, owner: str, spender: str) -> int:
        return self.allowances[(owner, spender)]

    def decode_logs(self, receipt: Any) -> list[DecodedEvent]:
        return []

    def check_transfer(self, owner: str, amount: int, spender: str) -> None:
        if self.balances[owner] < amount:
            raise ValueError(f"insufficient balance: {owner} has {self.balances[owner]} {self.symbol}")
        if self.allowances[(owner, spender)] < amount:
            raise ValueError(f"insufficient allowance for {self.symbol}")

    def transfer(self, owner: str, to: str, amount: int) -> None:
        self.balances[owner] -= amount
        self.balances[to] += amount


class FakeExchange:
    """仅覆盖右侧订单完全吃掉左侧订单 taker 资产的撮合情形。"""

    def __init__(self, chain: FakeChain, tokens: dict[bytes, FakeToken], proxy: str):
        self.chain = chain
        self.address = GANACHE_EXCHANGE_ADDRESS
        self.tokens = tokens
        self.proxy = proxy
        self.calls: list[dict[str, Any]] = []
        self.fills: dict[str, dict[str, Any]] = {}
        self.filled: dict[str, int] = {}

    async def match_orders(self, left: Order, right: Order, left_sig: bytes, right_sig: bytes, sender: str, tx_options=None) -> str:
        self.calls.append({"sender": sender, "tx_options": {**TX_DEFAULTS, **(tx_options or {})}})
        left_hash = get_order_hash_hex(left)
        right_hash = get_order_hash_hex(right)
        if not is_valid_signature(bytes.fromhex(left_hash[2:]), left_sig, left.maker_address):
            raise ValueError("invalid left signature")
        if not is_valid_signature(bytes.fromhex(right_hash[2:]), right_sig, right.maker_address):
            raise ValueError("invalid right signature")
        assert right.maker_asset_amount == left.taker_asset_amount

        token_a = self.tokens[left.maker_asset_data]
        token_b = self.tokens[left.taker_asset_data]
        token_a.check_transfer(left.maker_address, left.maker_asset_amount, self.proxy)
        token_b.check_transfer(right.maker_address, right.maker_asset_amount, self.proxy)

        token_a.transfer(left.maker_address, right.maker_address, right.taker_asset_amount)
        token_a.transfer(left.maker_address, sender, left.maker_asset_amount - right.taker_asset_amount)
        token_b.transfer(right.maker_address, left.maker_address, right.maker_asset_amount)
        self.filled[left_hash] = left.taker_asset_amount
        self.filled[right_hash] = right.taker_asset_amount

        tx_hash = self.chain.record("matchOrders", sender)
        self.fills[tx_hash] = {"hashes": [left_hash, right_hash]}
        return tx_hash

    async def get_order_info(self, order: Order) -> tuple[OrderStatus, str, int]:
        order_hash = get_order_hash_hex(order)
        filled = self.filled.get(order_hash, 0)
        status = OrderStatus.FULLY_FILLED if filled >= order.taker_asset_amount else OrderStatus.FILLABLE
        return status, order_hash, filled

    def decode_logs(self, receipt: Any) -> list[DecodedEvent]:
        tx_hash = "0x" + receipt["transactionHash"].hex()
        fill = self.fills.get(tx_hash)
        if not fill:
            return []
        return [DecodedEvent(name="Fill", address=self.address, args={"orderHash": h}) for h in fill["hashes"]]


def _make_context(wallet: MnemonicWallet, *, maker_zrx: int = 1000) -> ScenarioContext:
    chain = FakeChain(wallet)
    zrx = FakeToken(chain, GANACHE_ZRX_TOKEN_ADDRESS, "ZRX")
    weth = FakeToken(chain, GANACHE_ETHER_TOKEN_ADDRESS, "WETH")
    zrx.balances[wallet.get_available_addresses()[0]] = maker_zrx

    from zrx_starter_cli.services.asset_data import encode_erc20_asset_data

    tokens = {encode_erc20_asset_data(zrx.address): zrx, encode_erc20_asset_data(weth.address): weth}
    exchange = FakeExchange(chain, tokens, GANACHE_ERC20_PROXY_ADDRESS)
    return ScenarioContext(
        settings=Settings.load(overrides={"record_matches": False}),
        wallet=wallet,
        chain=chain,  # type: ignore[arg-type]
        zrx_token=zrx,  # type: ignore[arg-type]
        ether_token=weth,  # type: ignore[arg-type]
        exchange=exchange,  # type: ignore[arg-type]
        erc20_proxy_address=GANACHE_ERC20_PROXY_ADDRESS,
    )


def _printer() -> tuple[RichPrinter, io.StringIO]:
    buffer = io.StringIO()
    return RichPrinter(Console(file=buffer, width=240, color_system=None)), buffer


def test_match_orders_moves_balances_by_cross_fill(wallet: MnemonicWallet) -> None:
    """10 ZRX 换 4 WETH 与 4 WETH 换 2 ZRX 撮合后，余额按交叉成交变化。"""

    ctx = _make_context(wallet)
    maker, taker, matcher = wallet.get_available_addresses()
    printer, _ = _printer()

    result = asyncio.run(run_match_orders(ctx, printer, MatchOrdersParams()))

    zrx, weth = ctx.zrx_token, ctx.ether_token
    # taker 存入的 4 WETH 全部转给 maker
    assert weth.balances[maker] == 4
    assert weth.balances[taker] == 0
    assert zrx.balances[maker] == 990
    assert zrx.balances[taker] == 2
    # 撮合方获得价差
    assert zrx.balances[matcher] == 8
    assert result.matcher == matcher


def test_match_orders_sequence_and_submitter(wallet: MnemonicWallet) -> None:
    ctx = _make_context(wallet)
    maker, taker, matcher = wallet.get_available_addresses()
    printer, _ = _printer()

    result = asyncio.run(run_match_orders(ctx, printer))

    assert ctx.chain.mined == ["ZRX.approve", "WETH.approve", "WETH.deposit", "matchOrders"]
    call = ctx.exchange.calls[0]
    assert call["sender"] == matcher
    assert call["sender"] not in (result.left.order.maker_address, result.right.order.maker_address)
    assert call["tx_options"]["gas"] == TX_DEFAULTS["gas"]
    assert result.left.order.maker_address == maker
    assert result.right.order.maker_address == taker
    assert result.left.order.expiration_time_seconds == result.right.order.expiration_time_seconds
    assert result.left.order.salt != result.right.order.salt


def test_match_orders_reports_both_order_hashes(wallet: MnemonicWallet) -> None:
    ctx = _make_context(wallet)
    printer, buffer = _printer()

    result = asyncio.run(run_match_orders(ctx, printer))

    assert result.filled_order_hashes == [result.left.order_hash_hex, result.right.order_hash_hex]
    output = buffer.getvalue()
    assert "Match Orders" in output
    assert "left orderHash" in output
    assert result.left.order_hash_hex in output
    assert result.right.order_hash_hex in output
    assert "FULLY_FILLED" in output


def test_match_orders_with_eip712_signatures(wallet: MnemonicWallet) -> None:
    ctx = _make_context(wallet)
    printer, _ = _printer()

    result = asyncio.run(run_match_orders(ctx, printer, MatchOrdersParams(signature_type=SignatureType.EIP712)))

    assert result.left.signature[-1] == SignatureType.EIP712
    assert result.right.signature[-1] == SignatureType.EIP712


def test_skipping_deposit_fails_with_insufficient_balance(wallet: MnemonicWallet) -> None:
    ctx = _make_context(wallet)
    printer, _ = _printer()

    with pytest.raises(ValueError, match="insufficient balance"):
        asyncio.run(run_match_orders(ctx, printer, MatchOrdersParams(deposit=False)))
    assert "matchOrders" not in ctx.chain.mined


def test_match_orders_requires_three_accounts() -> None:
    from zrx_starter_cli.constants import BASE_DERIVATION_PATH, MNEMONIC

    small_wallet = MnemonicWallet(MNEMONIC, BASE_DERIVATION_PATH, num_accounts=2)
    ctx = _make_context(small_wallet)
    printer, _ = _printer()

    with pytest.raises(ValueError, match="3 accounts"):
        asyncio.run(run_match_orders(ctx, printer))


def test_open_context_closes_provider_on_failure(monkeypatch: pytest.MonkeyPatch, wallet: MnemonicWallet) -> None:
    """场景抛出异常时仍需释放 provider 连接。"""

    ctx = _make_context(wallet)
    monkeypatch.setattr(context_module, "build_context", lambda settings: ctx)

    async def _run() -> None:
        async with open_context(ctx.settings) as opened:
            assert opened.chain.connected
            await run_match_orders(opened, _printer()[0], MatchOrdersParams(deposit=False))

    with pytest.raises(ValueError):
        asyncio.run(_run())
    assert ctx.chain.close_calls == 1


def test_open_context_closes_provider_on_success(monkeypatch: pytest.MonkeyPatch, wallet: MnemonicWallet) -> None:
    ctx = _make_context(wallet)
    monkeypatch.setattr(context_module, "build_context", lambda settings: ctx)

    async def _run():
        async with open_context(ctx.settings) as opened:
            return await run_match_orders(opened, _printer()[0])

    result = asyncio.run(_run())
    assert result.tx_hash in ctx.chain.receipts
    assert ctx.chain.close_calls == 1
