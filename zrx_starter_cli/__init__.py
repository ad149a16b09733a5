"""0x v2 starter scenarios: order construction, signing and on-chain matching."""

__version__ = "0.1.0"
