"""订单哈希签名与验签（0x v2 签名格式）。

签名布局为 ``v (1) || r (32) || s (32) || signatureType (1)``，共 66 字节。
"""

from __future__ import annotations

from eth_keys import keys
from eth_utils import keccak, to_checksum_address

from ..types import Order, SignatureType, SignedOrder
from ..wallet import MnemonicWallet
from .order_utils import get_order_hash

SIGNATURE_LENGTH = 66
_PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n32"


def _pack_signature(v: int, r: int, s: int, signature_type: SignatureType) -> bytes:
    return bytes([v]) + r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([int(signature_type)])


def sign_order_hash(
    order_hash: bytes,
    signer_address: str,
    wallet: MnemonicWallet,
    signature_type: SignatureType = SignatureType.ETH_SIGN,
) -> bytes:
    """使用钱包中的账户对订单哈希签名。

    Args:
        order_hash: 32 字节订单哈希。
        signer_address: 签名账户，必须由 ``wallet`` 管理。
        wallet: 本地助记词钱包。
        signature_type: ETH_SIGN（personal message 前缀）或 EIP712（直接签哈希）。

    Returns:
        66 字节的 0x v2 签名。

    Raises:
        ValueError: 不支持的签名类型。
    """
    if signature_type == SignatureType.ETH_SIGN:
        v, r, s = wallet.sign_personal_message(order_hash, signer_address)
    elif signature_type == SignatureType.EIP712:
        v, r, s = wallet.sign_hash(order_hash, signer_address)
    else:
        raise ValueError(f"Unsupported signature type for local signing: {signature_type.name}")
    return _pack_signature(v, r, s, signature_type)


def sign_order(
    order: Order,
    signer_address: str,
    wallet: MnemonicWallet,
    signature_type: SignatureType = SignatureType.ETH_SIGN,
) -> SignedOrder:
    order_hash = get_order_hash(order)
    signature = sign_order_hash(order_hash, signer_address, wallet, signature_type)
    return SignedOrder(order=order, order_hash=order_hash, signature=signature, signature_type=signature_type)


def recover_signer(order_hash: bytes, signature: bytes) -> str:
    """从 0x v2 签名中恢复签名者地址。

    Raises:
        ValueError: 签名长度错误或签名类型无法本地恢复。
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise ValueError(f"Invalid signature length: {len(signature)} (expected {SIGNATURE_LENGTH})")
    signature_type = SignatureType(signature[-1])
    if signature_type == SignatureType.ETH_SIGN:
        digest = keccak(_PERSONAL_MESSAGE_PREFIX + order_hash)
    elif signature_type == SignatureType.EIP712:
        digest = order_hash
    else:
        raise ValueError(f"Cannot recover signer for signature type {signature_type.name}")

    v = signature[0]
    # 兼容 0/1 与 27/28 两种 v 表示
    if v >= 27:
        v -= 27
    r = int.from_bytes(signature[1:33], "big")
    s = int.from_bytes(signature[33:65], "big")
    public_key = keys.Signature(vrs=(v, r, s)).recover_public_key_from_msg_hash(digest)
    return public_key.to_checksum_address()


def is_valid_signature(order_hash: bytes, signature: bytes, signer_address: str) -> bool:
    """判断签名是否由 ``signer_address`` 针对 ``order_hash`` 生成。"""
    try:
        recovered = recover_signer(order_hash, signature)
    except Exception:  # noqa: BLE001
        return False
    return recovered == to_checksum_address(signer_address)
