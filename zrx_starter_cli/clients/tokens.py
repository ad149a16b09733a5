"""ERC20 / WETH 代币合约客户端。"""

from __future__ import annotations

from typing import Any, Optional

from eth_utils import to_checksum_address

from ..types import DecodedEvent
from .abis import ERC20_ABI, ETHER_TOKEN_ABI
from .chain import ChainClient, decode_receipt_logs, event_names


class TokenClient:
    """ERC20 代币客户端。

    写操作返回交易哈希，调用方自行通过 ``ChainClient.await_transaction_mined``
    等待上链；读操作直接返回链上数值。
    """

    abi: list[dict] = ERC20_ABI

    def __init__(self, chain: ChainClient, address: str, symbol: Optional[str] = None):
        self.chain = chain
        self.address = to_checksum_address(address)
        self.contract = chain.contract(self.address, self.abi)
        self._symbol = symbol

    @property
    def symbol(self) -> str:
        return self._symbol or self.address[:10]

    async def approve(self, spender: str, amount: int, sender: str, tx_options: Optional[dict[str, Any]] = None) -> str:
        fn = self.contract.functions.approve(to_checksum_address(spender), amount)
        return await self.chain.send_transaction(fn, sender, tx_options=tx_options)

    async def balance_of(self, owner: str) -> int:
        return await self.contract.functions.balanceOf(to_checksum_address(owner)).call()

    async def allowance(self, owner: str, spender: str) -> int:
        return await self.contract.functions.allowance(to_checksum_address(owner), to_checksum_address(spender)).call()

    def decode_logs(self, receipt: Any) -> list[DecodedEvent]:
        return decode_receipt_logs(self.contract, event_names(self.abi), receipt)


class EtherTokenClient(TokenClient):
    """WETH 合约客户端，额外支持 ETH 与 WETH 之间的兑换。"""

    abi: list[dict] = ETHER_TOKEN_ABI

    async def deposit(self, amount: int, sender: str, tx_options: Optional[dict[str, Any]] = None) -> str:
        """将 ``amount`` wei 的 ETH 存入 WETH 合约。"""
        fn = self.contract.functions.deposit()
        return await self.chain.send_transaction(fn, sender, value=amount, tx_options=tx_options)

    async def withdraw(self, amount: int, sender: str, tx_options: Optional[dict[str, Any]] = None) -> str:
        fn = self.contract.functions.withdraw(amount)
        return await self.chain.send_transaction(fn, sender, tx_options=tx_options)
