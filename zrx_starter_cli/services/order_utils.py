"""0x v2 订单构造与 EIP-712 哈希。"""

from __future__ import annotations

import secrets
import time
from dataclasses import replace
from typing import Optional

from eth_abi import encode as abi_encode
from eth_utils import keccak, to_checksum_address

from ..constants import EIP712_DOMAIN_NAME, EIP712_DOMAIN_VERSION, NULL_ADDRESS, ZERO
from ..types import Order

EIP712_DOMAIN_SCHEMA_HASH = keccak(text="EIP712Domain(string name,string version,address verifyingContract)")
EIP712_ORDER_SCHEMA_HASH = keccak(
    text=(
        "Order("
        "address makerAddress,"
        "address takerAddress,"
        "address feeRecipientAddress,"
        "address senderAddress,"
        "uint256 makerAssetAmount,"
        "uint256 takerAssetAmount,"
        "uint256 makerFee,"
        "uint256 takerFee,"
        "uint256 expirationTimeSeconds,"
        "uint256 salt,"
        "bytes makerAssetData,"
        "bytes takerAssetData"
        ")"
    )
)


def generate_pseudo_random_salt() -> int:
    """生成 256 位随机 salt（使用 CSPRNG）。"""
    return secrets.randbits(256)


def expiration_from_now(ttl_seconds: int, now: Optional[float] = None) -> int:
    """返回 ``now + ttl_seconds`` 的 Unix 秒时间戳。"""
    base = time.time() if now is None else now
    return int(base) + int(ttl_seconds)


def build_order(
    *,
    exchange_address: str,
    maker_address: str,
    maker_asset_amount: int,
    taker_asset_amount: int,
    maker_asset_data: bytes,
    taker_asset_data: bytes,
    expiration_time_seconds: int,
    taker_address: str = NULL_ADDRESS,
    sender_address: str = NULL_ADDRESS,
    fee_recipient_address: str = NULL_ADDRESS,
    maker_fee: int = ZERO,
    taker_fee: int = ZERO,
    salt: Optional[int] = None,
) -> Order:
    """构造一张订单，未指定的地址使用 NULL_ADDRESS，手续费默认为 0。"""
    return Order(
        exchange_address=exchange_address,
        maker_address=maker_address,
        taker_address=taker_address,
        sender_address=sender_address,
        fee_recipient_address=fee_recipient_address,
        expiration_time_seconds=expiration_time_seconds,
        salt=generate_pseudo_random_salt() if salt is None else salt,
        maker_asset_amount=maker_asset_amount,
        taker_asset_amount=taker_asset_amount,
        maker_asset_data=maker_asset_data,
        taker_asset_data=taker_asset_data,
        maker_fee=maker_fee,
        taker_fee=taker_fee,
    )


def build_matching_order(left: Order, maker_address: str, taker_asset_amount: int, salt: Optional[int] = None) -> Order:
    """根据左侧订单构造可与之撮合的右侧订单。

    右侧订单卖出左侧订单想要的资产（数量等于左侧 taker_asset_amount），
    换取左侧订单卖出的资产。

    Args:
        left: 左侧订单。
        maker_address: 右侧订单的挂单方。
        taker_asset_amount: 右侧订单希望换得的数量。
        salt: 可选的固定 salt，缺省时随机生成。

    Returns:
        新的右侧订单，过期时间与左侧相同。
    """
    return replace(
        left,
        maker_address=maker_address,
        salt=generate_pseudo_random_salt() if salt is None else salt,
        maker_asset_amount=left.taker_asset_amount,
        taker_asset_amount=taker_asset_amount,
        maker_asset_data=left.taker_asset_data,
        taker_asset_data=left.maker_asset_data,
    )


def get_domain_separator(exchange_address: str) -> bytes:
    return keccak(
        abi_encode(
            ["bytes32", "bytes32", "bytes32", "address"],
            [
                EIP712_DOMAIN_SCHEMA_HASH,
                keccak(text=EIP712_DOMAIN_NAME),
                keccak(text=EIP712_DOMAIN_VERSION),
                to_checksum_address(exchange_address),
            ],
        )
    )


def _hash_order_struct(order: Order) -> bytes:
    return keccak(
        abi_encode(
            [
                "bytes32",
                "address",
                "address",
                "address",
                "address",
                "uint256",
                "uint256",
                "uint256",
                "uint256",
                "uint256",
                "uint256",
                "bytes32",
                "bytes32",
            ],
            [
                EIP712_ORDER_SCHEMA_HASH,
                to_checksum_address(order.maker_address),
                to_checksum_address(order.taker_address),
                to_checksum_address(order.fee_recipient_address),
                to_checksum_address(order.sender_address),
                order.maker_asset_amount,
                order.taker_asset_amount,
                order.maker_fee,
                order.taker_fee,
                order.expiration_time_seconds,
                order.salt,
                keccak(order.maker_asset_data),
                keccak(order.taker_asset_data),
            ],
        )
    )


def get_order_hash(order: Order) -> bytes:
    """计算订单的 EIP-712 哈希（与 Exchange.getOrderInfo 返回的 orderHash 一致）。"""
    return keccak(b"\x19\x01" + get_domain_separator(order.exchange_address) + _hash_order_struct(order))


def get_order_hash_hex(order: Order) -> str:
    return "0x" + get_order_hash(order).hex()
