from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional

from eth_utils import to_checksum_address


class SignatureType(IntEnum):
    """0x v2 签名类型，编码在签名的最后一个字节。"""

    ILLEGAL = 0
    INVALID = 1
    EIP712 = 2
    ETH_SIGN = 3
    WALLET = 4
    VALIDATOR = 5
    PRE_SIGNED = 6


@dataclass(frozen=True)
class Order:
    """0x v2 订单。

    订单在哈希与签名之后不可再修改，任何字段变化都会使签名失效；
    需要派生新订单时使用 ``dataclasses.replace``。

    Attributes:
        exchange_address: Exchange 合约地址，同时作为 EIP-712 域的 verifyingContract。
        maker_address: 挂单方地址。
        taker_address: 指定吃单方，NULL_ADDRESS 表示任意吃单方。
        sender_address: 指定交易发送方，NULL_ADDRESS 表示不限制。
        fee_recipient_address: 手续费接收方。
        expiration_time_seconds: 过期时间（Unix 秒）。
        salt: 随机数，保证订单哈希唯一。
        maker_asset_amount: 挂单方卖出数量（最小单位）。
        taker_asset_amount: 挂单方希望换得的数量（最小单位）。
        maker_asset_data: 卖出资产的 asset data 编码。
        taker_asset_data: 买入资产的 asset data 编码。
        maker_fee: 挂单方手续费。
        taker_fee: 吃单方手续费。
    """

    exchange_address: str
    maker_address: str
    taker_address: str
    sender_address: str
    fee_recipient_address: str
    expiration_time_seconds: int
    salt: int
    maker_asset_amount: int
    taker_asset_amount: int
    maker_asset_data: bytes
    taker_asset_data: bytes
    maker_fee: int = 0
    taker_fee: int = 0

    def as_contract_tuple(self) -> tuple:
        """按照 Exchange 合约 ABI 中 Order 结构体的字段顺序返回元组。"""
        return (
            to_checksum_address(self.maker_address),
            to_checksum_address(self.taker_address),
            to_checksum_address(self.fee_recipient_address),
            to_checksum_address(self.sender_address),
            self.maker_asset_amount,
            self.taker_asset_amount,
            self.maker_fee,
            self.taker_fee,
            self.expiration_time_seconds,
            self.salt,
            self.maker_asset_data,
            self.taker_asset_data,
        )

    def as_display_rows(self) -> list[tuple[str, str]]:
        return [
            ("exchangeAddress", self.exchange_address),
            ("makerAddress", self.maker_address),
            ("takerAddress", self.taker_address),
            ("senderAddress", self.sender_address),
            ("feeRecipientAddress", self.fee_recipient_address),
            ("expirationTimeSeconds", str(self.expiration_time_seconds)),
            ("salt", str(self.salt)),
            ("makerAssetAmount", str(self.maker_asset_amount)),
            ("takerAssetAmount", str(self.taker_asset_amount)),
            ("makerAssetData", "0x" + self.maker_asset_data.hex()),
            ("takerAssetData", "0x" + self.taker_asset_data.hex()),
            ("makerFee", str(self.maker_fee)),
            ("takerFee", str(self.taker_fee)),
        ]


@dataclass(frozen=True)
class SignedOrder:
    order: Order
    order_hash: bytes
    signature: bytes
    signature_type: SignatureType

    @property
    def order_hash_hex(self) -> str:
        return "0x" + self.order_hash.hex()

    @property
    def signature_hex(self) -> str:
        return "0x" + self.signature.hex()


@dataclass
class DecodedEvent:
    """从交易回执日志中解码出的合约事件。

    Attributes:
        name: 事件名称，如 ``Fill``、``Approval``。
        address: 发出事件的合约地址。
        args: 事件参数（bytes 已转为十六进制字符串）。
    """

    name: str
    address: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class MatchOrdersResult:
    """一次 match orders 场景的执行结果。

    Attributes:
        tx_hash: matchOrders 交易哈希。
        receipt: 节点返回的交易回执。
        left: 左侧（maker 账户）已签名订单。
        right: 右侧（taker 账户）已签名订单。
        matcher: 提交撮合交易的账户。
        filled_order_hashes: 回执中 Fill 事件携带的订单哈希。
    """

    tx_hash: str
    receipt: Any
    left: SignedOrder
    right: SignedOrder
    matcher: str
    filled_order_hashes: list[str] = field(default_factory=list)
    block_number: Optional[int] = None
