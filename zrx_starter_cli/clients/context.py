"""场景运行所需的共享对象，构建一次后显式传递。"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from eth_utils import to_checksum_address

from ..config import Settings
from ..wallet import MnemonicWallet
from .chain import ChainClient
from .exchange import ExchangeClient
from .tokens import EtherTokenClient, TokenClient


@dataclass
class ScenarioContext:
    """场景上下文。

    Attributes:
        settings: 全局配置。
        wallet: 账户提供者与签名者。
        chain: 链连接，持有唯一需要释放的资源。
        zrx_token: ZRX 代币客户端。
        ether_token: WETH 代币客户端。
        exchange: 0x v2 Exchange 客户端。
        erc20_proxy_address: ERC20 asset proxy 地址，授权的 spender。
    """

    settings: Settings
    wallet: MnemonicWallet
    chain: ChainClient
    zrx_token: TokenClient
    ether_token: EtherTokenClient
    exchange: ExchangeClient
    erc20_proxy_address: str

    @property
    def tokens(self) -> list[TokenClient]:
        return [self.zrx_token, self.ether_token]

    async def close(self) -> None:
        await self.chain.close()


def build_context(settings: Settings, wallet: MnemonicWallet | None = None) -> ScenarioContext:
    """根据配置构建场景上下文（尚未连接节点）。"""
    wallet = wallet or MnemonicWallet.from_settings(settings)
    chain = ChainClient(settings, wallet)
    return ScenarioContext(
        settings=settings,
        wallet=wallet,
        chain=chain,
        zrx_token=TokenClient(chain, settings.zrx_token_address, symbol="ZRX"),
        ether_token=EtherTokenClient(chain, settings.ether_token_address, symbol="WETH"),
        exchange=ExchangeClient(chain, settings.exchange_address),
        erc20_proxy_address=to_checksum_address(settings.erc20_proxy_address),
    )


@asynccontextmanager
async def open_context(settings: Settings) -> AsyncIterator[ScenarioContext]:
    """连接节点并在退出时（包括异常路径）释放 provider。"""
    ctx = build_context(settings)
    try:
        await ctx.chain.connect()
        yield ctx
    finally:
        await ctx.close()
