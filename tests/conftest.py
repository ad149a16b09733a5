from __future__ import annotations

import pytest

from zrx_starter_cli.constants import (
    BASE_DERIVATION_PATH,
    GANACHE_ETHER_TOKEN_ADDRESS,
    GANACHE_EXCHANGE_ADDRESS,
    GANACHE_ZRX_TOKEN_ADDRESS,
    MNEMONIC,
)
from zrx_starter_cli.services.asset_data import encode_erc20_asset_data
from zrx_starter_cli.services.order_utils import build_order
from zrx_starter_cli.types import Order
from zrx_starter_cli.wallet import MnemonicWallet


@pytest.fixture(scope="session")
def wallet() -> MnemonicWallet:
    """与 ganache 快照同一助记词派生的前三个账户。"""

    return MnemonicWallet(MNEMONIC, BASE_DERIVATION_PATH, num_accounts=3)


@pytest.fixture
def left_order(wallet: MnemonicWallet) -> Order:
    maker = wallet.get_available_addresses()[0]
    return build_order(
        exchange_address=GANACHE_EXCHANGE_ADDRESS,
        maker_address=maker,
        maker_asset_amount=10,
        taker_asset_amount=4,
        maker_asset_data=encode_erc20_asset_data(GANACHE_ZRX_TOKEN_ADDRESS),
        taker_asset_data=encode_erc20_asset_data(GANACHE_ETHER_TOKEN_ADDRESS),
        expiration_time_seconds=1_700_000_600,
        salt=123456789,
    )
