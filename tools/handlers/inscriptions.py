# =============================================================================
# tools/handlers/inscriptions.py  -  Inscription lookups
# =============================================================================
#
# Single inscriptions (info, traits, transfer history, detail by number or
# id) and the global paginated inscription list.
# =============================================================================

from tools.handlers import formatting as fmt
from tools.handlers.base import (
    ArgumentError,
    OrdiscanTool,
    drop_none,
    optional_int,
    require,
    segment,
)


def rarity_description(rarity: float) -> str:
    """Describe a trait rarity percentage in words."""
    if rarity < 1:
        return "Extremely Rare"
    if rarity < 5:
        return "Very Rare"
    if rarity < 10:
        return "Rare"
    if rarity < 20:
        return "Uncommon"
    return "Common"


def inscription_summary(item: dict) -> dict:
    """Formatted view shared by the detail, list and collection tools."""
    return {
        "id": item["id"],
        "number": item.get("number"),
        "type": item.get("content_type"),
        "timestamp": fmt.timestamp(item.get("timestamp")),
        "owner": {
            "address": item.get("address"),
            "output": item.get("output"),
        },
        "short_id": fmt.short_id(item["id"]),
    }


class InscriptionIdTool(OrdiscanTool):
    endpoint = ""

    def parse(self, arguments: dict) -> dict:
        return {"id": require(arguments, "id")}

    def path(self, params: dict) -> str:
        suffix = f"/{self.endpoint}" if self.endpoint else ""
        return f"/inscription/{segment(params['id'])}{suffix}"


class InscriptionInfoTool(InscriptionIdTool):
    name = "ordiscan_inscription_info"

    def format(self, data, params):
        brc20 = data.get("brc20_action")
        return {
            "id": data["inscription_id"],
            "number": data["inscription_number"],
            "type": data.get("content_type"),
            "timestamp": fmt.timestamp(data.get("timestamp")),
            "sat": fmt.number(data.get("sat")),
            "content_url": data.get("content_url"),
            "collection": fmt.or_na(data.get("collection_slug")),
            "owner": {
                "address": data.get("owner_address"),
                "output": data.get("owner_output"),
            },
            "genesis": {
                "address": data.get("genesis_address"),
                "output": data.get("genesis_output"),
            },
            "satributes": data.get("satributes") or [],
            "metadata": data.get("metadata"),
            "metaprotocol": fmt.or_na(data.get("metaprotocol")),
            "parent": fmt.or_na(data.get("parent_inscription_id")),
            "delegate": fmt.or_na(data.get("delegate_inscription_id")),
            "submodules": data.get("submodules") or [],
            "sats_name": fmt.or_na(data.get("sats_name")),
            "brc20": {"type": brc20["type"], "tick": brc20["tick"]} if brc20 else None,
        }


class InscriptionTraitsTool(InscriptionIdTool):
    name = "ordiscan_inscription_traits"
    endpoint = "traits"

    def format(self, data, params):
        return {
            "total_traits": len(data),
            "traits": [
                {
                    "name": trait["name"],
                    "value": trait["value"],
                    "rarity": trait["rarity"],
                    "rarity_formatted": f"{trait['rarity']}%",
                    "rarity_description": rarity_description(trait["rarity"]),
                }
                for trait in data
            ],
        }


class InscriptionTransfersTool(InscriptionIdTool):
    name = "ordiscan_inscription_transfers"
    endpoint = "transfers"

    def parse(self, arguments: dict) -> dict:
        params = super().parse(arguments)
        params["page"] = optional_int(arguments, "page")
        return params

    def query(self, params: dict) -> dict:
        return drop_none({"page": params["page"]})

    def format(self, data, params):
        return {
            "total_transfers": len(data),
            "transfers": [
                {
                    "from": transfer.get("from_address") or "Genesis",
                    "to": transfer["to_address"],
                    "timestamp": fmt.timestamp(transfer.get("timestamp")),
                    "tx_id": transfer["tx_id"],
                    "short_tx_id": fmt.short_id(transfer["tx_id"]),
                }
                for transfer in data
            ],
        }


class InscriptionsListTool(OrdiscanTool):
    name = "ordiscan_inscriptions_list"

    def parse(self, arguments: dict) -> dict:
        return {
            "after": optional_int(arguments, "after"),
            "before": optional_int(arguments, "before"),
        }

    def path(self, params: dict) -> str:
        return "/inscriptions"

    def query(self, params: dict) -> dict:
        return drop_none(params)

    def format(self, data, params):
        return {
            "total_inscriptions": len(data),
            "inscriptions": [inscription_summary(item) for item in data],
        }


class InscriptionsDetailTool(OrdiscanTool):
    """Look an inscription up by id, or by number when no id is given."""

    name = "ordiscan_inscriptions_detail"

    def parse(self, arguments: dict) -> dict:
        inscription_id = str(arguments.get("id") or "").strip() or None
        number = optional_int(arguments, "number")
        if inscription_id is None and number is None:
            raise ArgumentError("Either number or id must be provided")
        return {"id": inscription_id, "number": number}

    def path(self, params: dict) -> str:
        key = params["id"] if params["id"] is not None else params["number"]
        return f"/inscription/{segment(key)}"

    def format(self, data, params):
        view = inscription_summary(data)
        view.update({
            "genesis": {
                "address": data.get("genesis_address"),
                "block": data.get("genesis_block_height"),
                "block_hash": data.get("genesis_block_hash"),
                "tx_id": data.get("genesis_tx_id"),
                "fee": data.get("genesis_fee"),
                "timestamp": fmt.timestamp(data.get("genesis_timestamp")),
            },
            "sat": {
                "ordinal": data.get("sat_ordinal"),
                "rarity": data.get("sat_rarity"),
                "coinbase_height": data.get("sat_coinbase_height"),
            },
            "collection": fmt.or_na(data.get("collection")),
        })
        if data.get("genesis_tx_id"):
            view["short_genesis_tx"] = fmt.short_id(data["genesis_tx_id"])
        return view


class AddressInscriptionsDetailTool(InscriptionsDetailTool):
    name = "ordiscan_address_inscriptions_detail"
