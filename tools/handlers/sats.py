# =============================================================================
# tools/handlers/sats.py  -  Individual sats and UTXO sat ranges
# =============================================================================
#
# Sat ranges come back from the API as [start, end) pairs.  The epoch and
# block figures below are estimates that assume the first-epoch subsidy of
# 50 BTC per block throughout, so they are only meaningful for early sats.
# =============================================================================

from tools.handlers import formatting as fmt
from tools.handlers.base import ArgumentError, OrdiscanTool, require, segment

MAX_ORDINAL = 2_099_999_997_689_999
SATS_PER_BLOCK = 5_000_000_000
BLOCKS_PER_EPOCH = 210_000
SATS_PER_EPOCH = SATS_PER_BLOCK * BLOCKS_PER_EPOCH

_RARITY_MARKERS = ("UNCOMMON", "RARE", "EPIC", "LEGENDARY", "MYTHIC")
_SPECIAL_BLOCKS = {"BLOCK_9", "BLOCK_78"}
_HISTORICAL = {"NAKAMOTO", "FIRST_TX", "VINTAGE", "PIZZA"}


def epoch_of(sat: int) -> int:
    return sat // SATS_PER_EPOCH


def block_estimate(sat: int) -> int:
    return sat // SATS_PER_BLOCK


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def summarize_epochs(ranges: list) -> list[dict]:
    """Count one sample per block-sized step of each range, grouped by epoch."""
    counts: dict[int, int] = {}
    for start, end in ranges:
        if end <= start:
            continue
        for epoch in range(epoch_of(start), epoch_of(end - 1) + 1):
            low = max(start, epoch * SATS_PER_EPOCH)
            high = min(end, (epoch + 1) * SATS_PER_EPOCH)
            samples = _ceil_div(high - start, SATS_PER_BLOCK) - _ceil_div(low - start, SATS_PER_BLOCK)
            if samples > 0:
                counts[epoch] = counts.get(epoch, 0) + samples
    return [{"epoch": epoch, "count": counts[epoch]} for epoch in sorted(counts)]


def categorize_satributes(satributes: list[str]) -> dict[str, list[str]]:
    categories: dict[str, list[str]] = {
        "rarity": [],
        "special_blocks": [],
        "historical": [],
        "other": [],
    }
    for satribute in satributes:
        if any(marker in satribute for marker in _RARITY_MARKERS):
            categories["rarity"].append(satribute)
        elif satribute in _SPECIAL_BLOCKS:
            categories["special_blocks"].append(satribute)
        elif satribute in _HISTORICAL:
            categories["historical"].append(satribute)
        else:
            categories["other"].append(satribute)
    return categories


def _range_view(start: int, end: int) -> dict:
    # `end` is exclusive in the API.
    return {
        "start": fmt.number(start),
        "end": fmt.number(end - 1),
        "count": fmt.number(end - start),
    }


class SatInfoTool(OrdiscanTool):
    name = "ordiscan_sat_info"

    def parse(self, arguments: dict) -> dict:
        raw = require(arguments, "ordinal")
        try:
            ordinal = int(raw)
        except ValueError:
            ordinal = -1
        if not 0 <= ordinal <= MAX_ORDINAL:
            raise ArgumentError(f"Ordinal must be between 0 and {MAX_ORDINAL}")
        return {"ordinal": ordinal}

    def path(self, params: dict) -> str:
        return f"/sat/{params['ordinal']}"

    def format(self, data, params):
        return {
            "ordinal": fmt.number(data["ordinal"]),
            "name": data.get("name"),
            "rarity": data.get("rarity"),
            "mining": {
                "block": data.get("block_height"),
                "coinbase_block": data.get("coinbase_height"),
                "timestamp": fmt.timestamp(data.get("timestamp")),
            },
            "position": {
                "cycle": data.get("cycle"),
                "epoch": data.get("epoch"),
                "period": data.get("period"),
                "decimal": data.get("decimal"),
                "degree": data.get("degree"),
                "percentile": data.get("percentile"),
            },
        }


class UtxoTool(OrdiscanTool):
    endpoint = ""

    def parse(self, arguments: dict) -> dict:
        return {"utxo": require(arguments, "utxo")}

    def path(self, params: dict) -> str:
        return f"/utxo/{segment(params['utxo'])}/{self.endpoint}"


class UtxoRareSatsTool(UtxoTool):
    name = "ordiscan_utxo_rare_sats"
    endpoint = "rare-sats"

    def format(self, data, params):
        return {
            "total_rare_sat_groups": len(data),
            "total_ranges": sum(len(group["ranges"]) for group in data),
            "total_sats": sum(end - start for group in data for start, end in group["ranges"]),
            "rare_sat_groups": [
                {
                    "satributes": group["satributes"],
                    "categories": categorize_satributes(group["satributes"]),
                    "ranges": [_range_view(start, end) for start, end in group["ranges"]],
                }
                for group in data
            ],
        }


class UtxoSatRangesTool(UtxoTool):
    name = "ordiscan_utxo_sat_ranges"
    endpoint = "sat-ranges"

    def format(self, data, params):
        total = sum(end - start for start, end in data)
        ranges = []
        for start, end in data:
            view = _range_view(start, end)
            view["epoch"] = epoch_of(start)
            view["block_estimate"] = block_estimate(start)
            ranges.append(view)
        return {
            "total_ranges": len(data),
            "total_sats": total,
            "ranges": ranges,
            "summary": {
                "epochs": summarize_epochs(data),
                "total_value": f"{total / fmt.SATS_PER_BTC:,.8f} BTC",
            },
        }
