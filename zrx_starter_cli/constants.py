"""0x v2 协议与本地 ganache 快照链使用的常量。"""

from __future__ import annotations

NULL_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO = 0
UNLIMITED_ALLOWANCE_IN_BASE_UNITS = 2**256 - 1

# 每笔交易默认附带的参数，可被调用方覆盖
TX_DEFAULTS: dict[str, int] = {"gas": 400000}

# Asset proxy id = bytes4(keccak256("ERC20Token(address)")) 等
ERC20_PROXY_ID = bytes.fromhex("f47261b0")
ERC721_PROXY_ID = bytes.fromhex("02571792")

EIP712_DOMAIN_NAME = "0x Protocol"
EIP712_DOMAIN_VERSION = "2"

GANACHE_RPC_URL = "http://localhost:8545"
GANACHE_NETWORK_ID = 50
MNEMONIC = "concert load couple harbor equip island argue ramp clarify fence smart topic"
BASE_DERIVATION_PATH = "44'/60'/0'/0"

# 0x ganache 快照中预部署的 v2 合约
GANACHE_EXCHANGE_ADDRESS = "0x48bacb9266a570d521063ef5dd96e61686dbe788"
GANACHE_ERC20_PROXY_ADDRESS = "0x1dc4c1cefef38a777b15aa20260a54e584b16c48"
GANACHE_ZRX_TOKEN_ADDRESS = "0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c"
GANACHE_ETHER_TOKEN_ADDRESS = "0x0b1ba0af832d7c05fd64161e0db78e85978e8082"
