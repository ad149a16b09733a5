"""0x v2 asset data 编解码。

asset data 由 4 字节 proxy id 与 ABI 编码的参数组成，用于告诉
Exchange 应该通过哪个 asset proxy、转移哪个合约的资产。
"""

from __future__ import annotations

from typing import Optional, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_utils import to_checksum_address

from ..constants import ERC20_PROXY_ID, ERC721_PROXY_ID

_ERC20_LENGTH = 4 + 32
_ERC721_LENGTH = 4 + 32 + 32


def encode_erc20_asset_data(token_address: str) -> bytes:
    """将 ERC20 合约地址编码为 asset data。

    Args:
        token_address: ERC20 合约地址。

    Returns:
        ``ERC20_PROXY_ID || abi.encode(address)`` 形式的 36 字节数据。
    """
    return ERC20_PROXY_ID + abi_encode(["address"], [to_checksum_address(token_address)])


def encode_erc721_asset_data(token_address: str, token_id: int) -> bytes:
    """将 ERC721 合约地址与 token id 编码为 asset data。"""
    return ERC721_PROXY_ID + abi_encode(["address", "uint256"], [to_checksum_address(token_address), token_id])


def decode_asset_data(asset_data: Union[bytes, str]) -> tuple[bytes, str, Optional[int]]:
    """解析 asset data。

    Args:
        asset_data: 原始字节或 ``0x`` 前缀的十六进制字符串。

    Returns:
        ``(proxy_id, token_address, token_id)``，ERC20 的 token_id 为 None。

    Raises:
        ValueError: proxy id 未知或长度不符合对应 proxy 的编码时抛出。
    """
    if isinstance(asset_data, str):
        asset_data = bytes.fromhex(asset_data[2:] if asset_data.startswith("0x") else asset_data)
    if len(asset_data) < 4:
        raise ValueError(f"asset data too short: {len(asset_data)} bytes")

    proxy_id = asset_data[:4]
    if proxy_id == ERC20_PROXY_ID:
        if len(asset_data) != _ERC20_LENGTH:
            raise ValueError(f"invalid ERC20 asset data length: {len(asset_data)}")
        (address,) = abi_decode(["address"], asset_data[4:])
        return proxy_id, to_checksum_address(address), None
    if proxy_id == ERC721_PROXY_ID:
        if len(asset_data) != _ERC721_LENGTH:
            raise ValueError(f"invalid ERC721 asset data length: {len(asset_data)}")
        address, token_id = abi_decode(["address", "uint256"], asset_data[4:])
        return proxy_id, to_checksum_address(address), int(token_id)
    raise ValueError(f"unknown asset proxy id: 0x{proxy_id.hex()}")
