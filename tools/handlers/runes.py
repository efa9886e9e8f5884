# =============================================================================
# tools/handlers/runes.py  -  Rune lookups
# =============================================================================
#
# ordiscan_main is the general rune status tool: it looks the rune up and,
# unless the caller passes block_height, asks /stats for the current block so
# it can say whether minting is open.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from tools.handlers import formatting as fmt
from tools.handlers.base import (
    OrdiscanAPIError,
    OrdiscanTool,
    drop_none,
    optional_int,
    optional_sort,
    require,
    segment,
)

logger = logging.getLogger(__name__)

RUNE_NAME_STATUS = {
    "ETCHED": "This name has already been taken",
    "AVAILABLE": "This name is available for etching",
    "LOCKED": "This name is not yet available for etching",
    "RESERVED": "This name is too long and can only be assigned randomly",
}


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def mint_status(rune: dict, block_height: Optional[int]) -> str:
    """Detailed minting status used by ordiscan_main."""
    if not block_height:
        return "Block height unknown"
    start = rune.get("mint_start_block")
    end = rune.get("mint_end_block")
    if start and block_height < start:
        return f"Minting not started yet. Starts at block {start}"
    if end and block_height > end:
        return f"Minting ended at block {end}"
    cap = _to_int(rune.get("mint_count_cap"))
    count = rune.get("current_mint_count") or 0
    if cap and count >= cap:
        return "Minting cap reached"
    return f"Active - {count} mints out of {rune.get('mint_count_cap')}"


def mint_window_status(start: Optional[int], end: Optional[int], block_height: Optional[int]) -> str:
    """Short minting status used by the rune list."""
    if not start and not end:
        return "No minting"
    if block_height is None:
        return "Unknown"
    if start and block_height < start:
        return "Not started"
    if end and block_height > end:
        return "Ended"
    return "Active"


def relative_unlock(value: Optional[str], now: Optional[datetime] = None) -> str:
    unlock = fmt.parse_time(value)
    if unlock is None:
        return fmt.NA
    now = now or datetime.now(timezone.utc)
    days = (unlock - now).days
    if days < 0:
        return "Already unlocked"
    if days == 0:
        return "Unlocks today"
    if days == 1:
        return "Unlocks tomorrow"
    return f"Unlocks in {days} days"


class RuneStatusTool(OrdiscanTool):
    name = "ordiscan_main"

    def parse(self, arguments: dict) -> dict:
        return {
            "rune_name": require(arguments, "rune_name"),
            "block_height": optional_int(arguments, "block_height"),
        }

    def path(self, params: dict) -> str:
        return f"/rune/{segment(params['rune_name'])}"

    async def fetch(self, api_key: str, params: dict) -> Any:
        if params["block_height"] is None:
            try:
                stats = await self.get(api_key, "/stats")
                params["block_height"] = stats.get("block_height")
            except (OrdiscanAPIError, OSError, ValueError, AttributeError) as exc:
                # The rune lookup still works without a block height.
                logger.warning(f"{self.name}: could not fetch block height: {exc}")
        return await super().fetch(api_key, params)

    def format(self, data, params):
        return {
            "name": data.get("formatted_name"),
            "supply": {
                "current": data.get("current_supply"),
                "premined": data.get("premined_amount"),
                "per_mint": fmt.or_na(data.get("amount_per_mint")),
            },
            "minting": {
                "current_count": data.get("current_mint_count"),
                "cap": data.get("mint_count_cap"),
                "start_block": data.get("mint_start_block"),
                "end_block": data.get("mint_end_block"),
                "status": mint_status(data, params.get("block_height")),
            },
            "details": {
                "symbol": data.get("symbol"),
                "decimals": data.get("decimals"),
                "inscription_id": data.get("inscription_id"),
                "etching_txid": data.get("etching_txid"),
            },
        }


class RunesListTool(OrdiscanTool):
    name = "ordiscan_runes_list"

    def parse(self, arguments: dict) -> dict:
        return {
            "sort": optional_sort(arguments),
            "after": optional_int(arguments, "after"),
            "before": optional_int(arguments, "before"),
            "block_height": optional_int(arguments, "block_height"),
        }

    def path(self, params: dict) -> str:
        return "/runes"

    def query(self, params: dict) -> dict:
        return drop_none({
            "sort": params["sort"],
            "after": params["after"],
            "before": params["before"],
        })

    def format(self, data, params):
        height = params.get("block_height")
        return {
            "total_runes": len(data),
            "runes": [
                {
                    "id": rune["id"],
                    "name": rune.get("formatted_name"),
                    "number": rune.get("number"),
                    "symbol": rune.get("symbol"),
                    "decimals": rune.get("decimals"),
                    "inscription": fmt.or_na(rune.get("inscription_id")),
                    "etching": {
                        "txid": fmt.or_na(rune.get("etching_txid")),
                        "timestamp": fmt.timestamp(rune.get("timestamp_unix")),
                    },
                    "supply": {
                        "premined": rune.get("premined_amount"),
                        "per_mint": fmt.or_na(rune.get("amount_per_mint")),
                        "mint_cap": fmt.or_na(rune.get("mint_count_cap")),
                    },
                    "minting": {
                        "start_block": fmt.or_na(rune.get("mint_start_block")),
                        "end_block": fmt.or_na(rune.get("mint_end_block")),
                        "status": mint_window_status(
                            rune.get("mint_start_block"), rune.get("mint_end_block"), height
                        ),
                    },
                }
                for rune in data
            ],
        }


class RuneMarketTool(OrdiscanTool):
    name = "ordiscan_rune_market"

    def parse(self, arguments: dict) -> dict:
        return {"name": require(arguments, "name")}

    def path(self, params: dict) -> str:
        return f"/rune/{segment(params['name'])}/market"

    def format(self, data, params):
        return {
            "price": {
                "sats": fmt.decimal(data.get("price_in_sats")),
                "usd": fmt.usd(data.get("price_in_usd")),
            },
            "market_cap": {
                "btc": fmt.decimal(data.get("market_cap_in_btc")),
                "usd": fmt.usd(data.get("market_cap_in_usd")),
            },
        }


class RuneNameUnlockTool(OrdiscanTool):
    name = "ordiscan_rune_name_unlock"

    def parse(self, arguments: dict) -> dict:
        return {"name": require(arguments, "name")}

    def path(self, params: dict) -> str:
        return f"/rune-name/{segment(params['name'])}"

    def format(self, data, params):
        status = data.get("status")
        return {
            "name": data.get("name"),
            "status": status,
            "status_description": RUNE_NAME_STATUS.get(status, "Unknown status"),
            "unlock": {
                "block": data.get("unlock_block_height"),
                "timestamp": fmt.timestamp(data.get("unlock_block_timestamp")),
                "relative_time": relative_unlock(data.get("unlock_block_timestamp")),
            },
        }
