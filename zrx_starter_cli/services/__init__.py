"""Protocol helpers and scenarios: asset data, order hashing, signing, match orders."""

from .asset_data import decode_asset_data, encode_erc20_asset_data, encode_erc721_asset_data
from .match_orders import MatchOrdersParams, run_match_orders
from .order_utils import build_matching_order, build_order, generate_pseudo_random_salt, get_order_hash
from .signing import is_valid_signature, recover_signer, sign_order, sign_order_hash

__all__ = [
    "decode_asset_data",
    "encode_erc20_asset_data",
    "encode_erc721_asset_data",
    "MatchOrdersParams",
    "run_match_orders",
    "build_matching_order",
    "build_order",
    "generate_pseudo_random_salt",
    "get_order_hash",
    "is_valid_signature",
    "recover_signer",
    "sign_order",
    "sign_order_hash",
]
