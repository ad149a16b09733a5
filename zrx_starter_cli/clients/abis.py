"""场景所需的最小合约 ABI（ERC20、WETH9、0x v2 Exchange）。"""

from __future__ import annotations

ERC20_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [{"name": "_owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [{"name": "_owner", "type": "address"}, {"name": "_spender", "type": "address"}],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [{"name": "_spender", "type": "address"}, {"name": "_value", "type": "uint256"}],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "_from", "type": "address"},
            {"indexed": True, "name": "_to", "type": "address"},
            {"indexed": False, "name": "_value", "type": "uint256"},
        ],
        "name": "Transfer",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "_owner", "type": "address"},
            {"indexed": True, "name": "_spender", "type": "address"},
            {"indexed": False, "name": "_value", "type": "uint256"},
        ],
        "name": "Approval",
        "type": "event",
    },
]

ETHER_TOKEN_ABI = ERC20_ABI + [
    {
        "constant": False,
        "inputs": [],
        "name": "deposit",
        "outputs": [],
        "payable": True,
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [{"name": "wad", "type": "uint256"}],
        "name": "withdraw",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "_owner", "type": "address"},
            {"indexed": False, "name": "_value", "type": "uint256"},
        ],
        "name": "Deposit",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "_owner", "type": "address"},
            {"indexed": False, "name": "_value", "type": "uint256"},
        ],
        "name": "Withdrawal",
        "type": "event",
    },
]

_ORDER_COMPONENTS = [
    {"name": "makerAddress", "type": "address"},
    {"name": "takerAddress", "type": "address"},
    {"name": "feeRecipientAddress", "type": "address"},
    {"name": "senderAddress", "type": "address"},
    {"name": "makerAssetAmount", "type": "uint256"},
    {"name": "takerAssetAmount", "type": "uint256"},
    {"name": "makerFee", "type": "uint256"},
    {"name": "takerFee", "type": "uint256"},
    {"name": "expirationTimeSeconds", "type": "uint256"},
    {"name": "salt", "type": "uint256"},
    {"name": "makerAssetData", "type": "bytes"},
    {"name": "takerAssetData", "type": "bytes"},
]

_FILL_RESULTS_COMPONENTS = [
    {"name": "makerAssetFilledAmount", "type": "uint256"},
    {"name": "takerAssetFilledAmount", "type": "uint256"},
    {"name": "makerFeePaid", "type": "uint256"},
    {"name": "takerFeePaid", "type": "uint256"},
]

EXCHANGE_ABI = [
    {
        "constant": False,
        "inputs": [
            {"components": _ORDER_COMPONENTS, "name": "leftOrder", "type": "tuple"},
            {"components": _ORDER_COMPONENTS, "name": "rightOrder", "type": "tuple"},
            {"name": "leftSignature", "type": "bytes"},
            {"name": "rightSignature", "type": "bytes"},
        ],
        "name": "matchOrders",
        "outputs": [
            {
                "components": [
                    {"components": _FILL_RESULTS_COMPONENTS, "name": "left", "type": "tuple"},
                    {"components": _FILL_RESULTS_COMPONENTS, "name": "right", "type": "tuple"},
                    {"name": "leftMakerAssetSpreadAmount", "type": "uint256"},
                ],
                "name": "matchedFillResults",
                "type": "tuple",
            }
        ],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [{"components": _ORDER_COMPONENTS, "name": "order", "type": "tuple"}],
        "name": "getOrderInfo",
        "outputs": [
            {
                "components": [
                    {"name": "orderStatus", "type": "uint8"},
                    {"name": "orderHash", "type": "bytes32"},
                    {"name": "orderTakerAssetFilledAmount", "type": "uint256"},
                ],
                "name": "orderInfo",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "makerAddress", "type": "address"},
            {"indexed": True, "name": "feeRecipientAddress", "type": "address"},
            {"indexed": False, "name": "takerAddress", "type": "address"},
            {"indexed": False, "name": "senderAddress", "type": "address"},
            {"indexed": False, "name": "makerAssetFilledAmount", "type": "uint256"},
            {"indexed": False, "name": "takerAssetFilledAmount", "type": "uint256"},
            {"indexed": False, "name": "makerFeePaid", "type": "uint256"},
            {"indexed": False, "name": "takerFeePaid", "type": "uint256"},
            {"indexed": True, "name": "orderHash", "type": "bytes32"},
            {"indexed": False, "name": "makerAssetData", "type": "bytes"},
            {"indexed": False, "name": "takerAssetData", "type": "bytes"},
        ],
        "name": "Fill",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "makerAddress", "type": "address"},
            {"indexed": True, "name": "feeRecipientAddress", "type": "address"},
            {"indexed": False, "name": "senderAddress", "type": "address"},
            {"indexed": True, "name": "orderHash", "type": "bytes32"},
            {"indexed": False, "name": "makerAssetData", "type": "bytes"},
            {"indexed": False, "name": "takerAssetData", "type": "bytes"},
        ],
        "name": "Cancel",
        "type": "event",
    },
]
