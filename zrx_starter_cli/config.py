from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    BASE_DERIVATION_PATH,
    GANACHE_ERC20_PROXY_ADDRESS,
    GANACHE_ETHER_TOKEN_ADDRESS,
    GANACHE_EXCHANGE_ADDRESS,
    GANACHE_NETWORK_ID,
    GANACHE_RPC_URL,
    GANACHE_ZRX_TOKEN_ADDRESS,
    MNEMONIC,
)


class Settings(BaseSettings):
    """运行时配置模型，从环境变量或 .env 加载。

    集中管理以太坊节点地址、助记词钱包、0x v2 合约地址、
    交易参数以及日志级别等配置。默认值对应本地 ganache
    0x 快照链。
    """

    # 本地数据目录，用于存放撮合记录等产物
    data_dir: Path = Path("data")
    record_matches: bool = True

    rpc_url: str = GANACHE_RPC_URL
    network_id: int = GANACHE_NETWORK_ID
    connect_attempts: int = 5

    # 助记词钱包：按 BIP-44 路径依次派生账户
    mnemonic: str = MNEMONIC
    base_derivation_path: str = BASE_DERIVATION_PATH
    num_accounts: int = 10

    exchange_address: str = GANACHE_EXCHANGE_ADDRESS
    erc20_proxy_address: str = GANACHE_ERC20_PROXY_ADDRESS
    zrx_token_address: str = GANACHE_ZRX_TOKEN_ADDRESS
    ether_token_address: str = GANACHE_ETHER_TOKEN_ADDRESS

    gas_price_wei: Optional[int] = None  # 为空时读取节点 gas_price
    tx_timeout_seconds: float = 120.0
    order_ttl_seconds: int = 600

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="", extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def load(cls, env_file: Optional[str | Path] = None, overrides: Optional[dict[str, Any]] = None) -> "Settings":
        """Load settings, allowing an optional .env override and programmatic overrides."""
        kwargs: dict[str, Any] = {}
        if env_file:
            kwargs["_env_file"] = env_file
        if overrides:
            kwargs.update(overrides)
        return cls(**kwargs)

    def ensure_data_dir(self) -> Path:
        """确保 data_dir 存在并返回绝对路径。"""

        path = self.data_dir
        if not path.is_absolute():
            path = Path(".").resolve() / path
        path.mkdir(parents=True, exist_ok=True)
        return path
