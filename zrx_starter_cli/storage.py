from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from .types import MatchOrdersResult


def _append_jsonl(path: Path, records: Iterable[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        for rec in records:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")


def log_matches(data_dir: Path, records: Iterable[dict[str, Any]], file_name: str = "matches.jsonl") -> Path:
    path = data_dir / file_name
    _append_jsonl(path, records)
    return path


def match_record(result: MatchOrdersResult) -> dict[str, Any]:
    return {
        "ts": timestamp(),
        "tx_hash": result.tx_hash,
        "block_number": result.block_number,
        "matcher": result.matcher,
        "left_maker": result.left.order.maker_address,
        "right_maker": result.right.order.maker_address,
        "left_order_hash": result.left.order_hash_hex,
        "right_order_hash": result.right.order_hash_hex,
        "filled_order_hashes": result.filled_order_hashes,
    }


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
