"""订单签名、验签与助记词钱包的单元测试。"""

from __future__ import annotations

import dataclasses

import pytest

from zrx_starter_cli.services.order_utils import get_order_hash
from zrx_starter_cli.services.signing import (
    SIGNATURE_LENGTH,
    is_valid_signature,
    recover_signer,
    sign_order,
    sign_order_hash,
)
from zrx_starter_cli.types import Order, SignatureType
from zrx_starter_cli.wallet import MnemonicWallet


def test_wallet_derives_ganache_snapshot_accounts(wallet: MnemonicWallet) -> None:
    addresses = wallet.get_available_addresses()
    assert len(addresses) == 3
    assert addresses[0].lower() == "0x5409ed021d9299bf6814279a6a1411a7e866a631"
    assert len(set(addresses)) == 3


def test_wallet_rejects_unknown_address(wallet: MnemonicWallet) -> None:
    with pytest.raises(KeyError):
        wallet.account_for("0x0000000000000000000000000000000000000001")


@pytest.mark.parametrize("signature_type", [SignatureType.ETH_SIGN, SignatureType.EIP712])
def test_signature_layout_and_recovery(
    left_order: Order, wallet: MnemonicWallet, signature_type: SignatureType
) -> None:
    maker = wallet.get_available_addresses()[0]
    signed = sign_order(left_order, maker, wallet, signature_type)

    assert len(signed.signature) == SIGNATURE_LENGTH
    assert signed.signature[0] in (27, 28)
    assert signed.signature[-1] == int(signature_type)
    assert signed.order_hash == get_order_hash(left_order)
    assert recover_signer(signed.order_hash, signed.signature) == maker
    assert is_valid_signature(signed.order_hash, signed.signature, maker)


def test_eth_sign_and_eip712_signatures_differ(left_order: Order, wallet: MnemonicWallet) -> None:
    maker = wallet.get_available_addresses()[0]
    order_hash = get_order_hash(left_order)
    eth_sign = sign_order_hash(order_hash, maker, wallet, SignatureType.ETH_SIGN)
    eip712 = sign_order_hash(order_hash, maker, wallet, SignatureType.EIP712)
    assert eth_sign[:65] != eip712[:65]


def test_signature_does_not_verify_against_other_order(left_order: Order, wallet: MnemonicWallet) -> None:
    maker = wallet.get_available_addresses()[0]
    signed = sign_order(left_order, maker, wallet)
    other_hash = get_order_hash(dataclasses.replace(left_order, salt=left_order.salt + 1))

    assert not is_valid_signature(other_hash, signed.signature, maker)


def test_signature_does_not_verify_for_other_signer(left_order: Order, wallet: MnemonicWallet) -> None:
    maker, taker, _ = wallet.get_available_addresses()
    signed = sign_order(left_order, maker, wallet)
    assert not is_valid_signature(signed.order_hash, signed.signature, taker)


def test_unsupported_signature_type_is_rejected(left_order: Order, wallet: MnemonicWallet) -> None:
    maker = wallet.get_available_addresses()[0]
    with pytest.raises(ValueError):
        sign_order_hash(get_order_hash(left_order), maker, wallet, SignatureType.WALLET)


def test_malformed_signature_is_invalid(left_order: Order, wallet: MnemonicWallet) -> None:
    maker = wallet.get_available_addresses()[0]
    order_hash = get_order_hash(left_order)
    with pytest.raises(ValueError):
        recover_signer(order_hash, b"\x1b" * 10)
    assert not is_valid_signature(order_hash, b"\x1b" * 10, maker)
