"""0x v2 Exchange 合约客户端。"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional

from eth_utils import to_checksum_address

from ..constants import TX_DEFAULTS
from ..types import DecodedEvent, Order
from .abis import EXCHANGE_ABI
from .chain import ChainClient, decode_receipt_logs, event_names


class OrderStatus(IntEnum):
    INVALID = 0
    INVALID_MAKER_ASSET_AMOUNT = 1
    INVALID_TAKER_ASSET_AMOUNT = 2
    FILLABLE = 3
    EXPIRED = 4
    FULLY_FILLED = 5
    CANCELLED = 6


class ExchangeClient:
    def __init__(self, chain: ChainClient, address: str):
        self.chain = chain
        self.address = to_checksum_address(address)
        self.contract = chain.contract(self.address, EXCHANGE_ABI)

    async def match_orders(
        self,
        left_order: Order,
        right_order: Order,
        left_signature: bytes,
        right_signature: bytes,
        sender: str,
        tx_options: Optional[dict[str, Any]] = None,
    ) -> str:
        """提交 matchOrders 交易，撮合两张互补订单。

        Args:
            left_order: 左侧订单。
            right_order: 右侧订单，其 maker 资产需为左侧订单的 taker 资产。
            left_signature: 左侧订单签名。
            right_signature: 右侧订单签名。
            sender: 提交交易的撮合账户。
            tx_options: 覆盖 ``TX_DEFAULTS`` 的交易参数。

        Returns:
            交易哈希。
        """
        fn = self.contract.functions.matchOrders(
            left_order.as_contract_tuple(),
            right_order.as_contract_tuple(),
            left_signature,
            right_signature,
        )
        options = {**TX_DEFAULTS, **(tx_options or {})}
        return await self.chain.send_transaction(fn, sender, tx_options=options)

    async def get_order_info(self, order: Order) -> tuple[OrderStatus, str, int]:
        """查询订单链上状态。

        Returns:
            ``(status, order_hash_hex, taker_asset_filled_amount)``。
        """
        status, order_hash, filled = await self.contract.functions.getOrderInfo(order.as_contract_tuple()).call()
        return OrderStatus(status), "0x" + bytes(order_hash).hex(), int(filled)

    def decode_logs(self, receipt: Any) -> list[DecodedEvent]:
        return decode_receipt_logs(self.contract, event_names(EXCHANGE_ABI), receipt)
