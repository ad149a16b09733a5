"""以太坊 JSON-RPC 连接与交易提交。

`ChainClient` 封装 web3.py 的 `AsyncWeb3`：交易在本地用助记词钱包签名，
再以 raw transaction 提交，并提供等待上链、回执解码与连接释放。
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from eth_utils import to_checksum_address, to_hex
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_fixed
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.logs import DISCARD

from ..config import Settings
from ..types import DecodedEvent
from ..wallet import MnemonicWallet

logger = logging.getLogger(__name__)


class ChainError(RuntimeError):
    """链上交互失败的基类。"""


class TransactionRevertedError(ChainError):
    """交易已上链但执行失败（receipt.status == 0）。"""

    def __init__(self, tx_hash: str, receipt: Any = None):
        super().__init__(f"Transaction reverted: {tx_hash}")
        self.tx_hash = tx_hash
        self.receipt = receipt


class ChainClient:
    """链连接客户端。

    Attributes:
        w3: `AsyncWeb3` 实例，供合约客户端创建合约对象。
        wallet: 用于本地签名交易的助记词钱包。
    """

    def __init__(self, settings: Settings, wallet: MnemonicWallet, w3: Optional[AsyncWeb3] = None):
        self.settings = settings
        self.wallet = wallet
        self.w3 = w3 or AsyncWeb3(AsyncHTTPProvider(settings.rpc_url))
        self._closed = False

    async def connect(self) -> int:
        """确认节点可用并返回 network id。

        节点刚启动时可能尚未就绪，按 ``connect_attempts`` 次数重试。

        Raises:
            ConnectionError: 多次尝试后仍无法连接。
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(1, self.settings.connect_attempts)),
            wait=wait_fixed(1),
            retry=retry_if_exception_type(ConnectionError),
            reraise=True,
        ):
            with attempt:
                if not await self.w3.is_connected():
                    raise ConnectionError(f"Ethereum node not reachable at {self.settings.rpc_url}")
        network_id = int(await self.w3.net.version)
        if network_id != self.settings.network_id:
            logger.warning(
                "Connected to network %s but contract addresses are configured for network %s",
                network_id,
                self.settings.network_id,
            )
        logger.info("Connected to %s (network id %s)", self.settings.rpc_url, network_id)
        return network_id

    def contract(self, address: str, abi: list[dict]):
        return self.w3.eth.contract(address=to_checksum_address(address), abi=abi)

    async def get_available_addresses(self) -> list[str]:
        return self.wallet.get_available_addresses()

    async def send_transaction(
        self,
        contract_function,
        sender: str,
        *,
        value: int = 0,
        tx_options: Optional[dict[str, Any]] = None,
    ) -> str:
        """构建、签名并提交一笔合约调用交易。

        Args:
            contract_function: 已绑定参数的合约函数，如 ``contract.functions.approve(a, b)``。
            sender: 发送账户，必须由钱包管理。
            value: 随交易发送的 wei 数量。
            tx_options: 额外交易参数（gas、gasPrice 等），覆盖默认值。

        Returns:
            ``0x`` 前缀的交易哈希。
        """
        account = self.wallet.account_for(sender)
        params: dict[str, Any] = {
            "from": account.address,
            "value": value,
            "nonce": await self.w3.eth.get_transaction_count(account.address, "pending"),
        }
        params.update(tx_options or {})
        params["from"] = account.address
        if "gasPrice" not in params and "maxFeePerGas" not in params:
            params["gasPrice"] = (
                self.settings.gas_price_wei if self.settings.gas_price_wei is not None else await self.w3.eth.gas_price
            )

        # 未指定 gas 时 build_transaction 会估算 gas，合约 revert 会在这里直接抛出
        tx = await contract_function.build_transaction(params)
        signed = account.sign_transaction(tx)
        tx_hash = to_hex(await self.w3.eth.send_raw_transaction(signed.raw_transaction))
        logger.info("Submitted %s from %s: %s", contract_function.fn_name, account.address, tx_hash)
        return tx_hash

    async def await_transaction_mined(self, tx_hash: str, timeout: Optional[float] = None) -> Any:
        """等待交易被打包并返回回执。

        Raises:
            TransactionRevertedError: 回执 status 为 0。
            web3.exceptions.TimeExhausted: 超时仍未上链。
        """
        receipt = await self.w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout if timeout is not None else self.settings.tx_timeout_seconds
        )
        logger.info(
            "Mined %s in block %s (gas used %s)", tx_hash, receipt.get("blockNumber"), receipt.get("gasUsed")
        )
        if receipt.get("status") == 0:
            raise TransactionRevertedError(tx_hash, receipt)
        return receipt

    async def close(self) -> None:
        """释放 provider 连接，可重复调用。"""
        if self._closed:
            return
        self._closed = True
        disconnect = getattr(self.w3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()
        logger.debug("Provider connection closed")


def decode_receipt_logs(contract, names: Iterable[str], receipt: Any) -> list[DecodedEvent]:
    """按事件名解码回执中属于 ``contract`` 的日志，无法匹配的日志忽略。"""
    indexed: list[tuple[int, DecodedEvent]] = []
    for name in names:
        event = getattr(contract.events, name)()
        for entry in event.process_receipt(receipt, errors=DISCARD):
            # 同签名事件（如 ERC20 Transfer）会被任意代币 ABI 解码，按合约地址过滤
            if entry["address"].lower() != contract.address.lower():
                continue
            indexed.append(
                (
                    entry["logIndex"],
                    DecodedEvent(
                        name=entry["event"],
                        address=entry["address"],
                        args={key: _display_value(val) for key, val in dict(entry["args"]).items()},
                    ),
                )
            )
    # 保持日志在回执中的原始顺序
    indexed.sort(key=lambda item: item[0])
    return [event for _, event in indexed]


def _display_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return value


def event_names(abi: list[dict]) -> list[str]:
    return [entry["name"] for entry in abi if entry.get("type") == "event"]
