"""基于助记词的本地钱包（账户提供者）。"""

from __future__ import annotations

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_keys import keys
from eth_utils import to_checksum_address

from .config import Settings

Account.enable_unaudited_hdwallet_features()


class MnemonicWallet:
    """按 BIP-44 路径从助记词派生账户，并在本地完成签名。

    派生顺序即账户顺序：索引 0 为 maker，1 为 taker，2 为撮合方，
    与 ganache 使用同一助记词时生成的账户一致。
    """

    def __init__(self, mnemonic: str, base_derivation_path: str, num_accounts: int = 10):
        if num_accounts < 1:
            raise ValueError("num_accounts must be positive")
        self.base_derivation_path = base_derivation_path.strip("/").removeprefix("m/")
        self._accounts: list[LocalAccount] = [
            Account.from_mnemonic(mnemonic, account_path=f"m/{self.base_derivation_path}/{index}")
            for index in range(num_accounts)
        ]
        self._by_address = {acct.address.lower(): acct for acct in self._accounts}

    @classmethod
    def from_settings(cls, settings: Settings) -> "MnemonicWallet":
        return cls(settings.mnemonic, settings.base_derivation_path, settings.num_accounts)

    def get_available_addresses(self) -> list[str]:
        """返回按派生索引排序的 checksum 地址列表。"""
        return [acct.address for acct in self._accounts]

    def account_for(self, address: str) -> LocalAccount:
        """查找地址对应的本地账户。

        Raises:
            KeyError: 地址不属于本钱包时抛出。
        """
        try:
            return self._by_address[address.lower()]
        except KeyError:
            raise KeyError(f"Address not managed by wallet: {to_checksum_address(address)}") from None

    def sign_personal_message(self, message: bytes, address: str) -> tuple[int, int, int]:
        """以 ``personal_sign`` 方式签名（带 Ethereum Signed Message 前缀）。

        Returns:
            ``(v, r, s)``，v 为 27/28。
        """
        acct = self.account_for(address)
        signed = Account.sign_message(encode_defunct(primitive=message), private_key=acct.key)
        return signed.v, signed.r, signed.s

    def sign_hash(self, message_hash: bytes, address: str) -> tuple[int, int, int]:
        """直接对 32 字节哈希签名，不附加任何前缀。"""
        if len(message_hash) != 32:
            raise ValueError(f"message hash must be 32 bytes, got {len(message_hash)}")
        acct = self.account_for(address)
        signature = keys.PrivateKey(acct.key).sign_msg_hash(message_hash)
        return signature.v + 27, signature.r, signature.s
