# =============================================================================
# tools/handlers/activity.py  -  Address activity feeds
# =============================================================================
#
# Paginated transfer history for an address (20 events per page), for
# inscriptions, runes and BRC-20 tokens.  All three accept the same
# arguments: address, page, sort ("newest" / "oldest").
# =============================================================================

from tools.handlers import formatting as fmt
from tools.handlers.base import (
    OrdiscanTool,
    drop_none,
    optional_int,
    optional_sort,
    require,
    segment,
)


class AddressActivityTool(OrdiscanTool):
    endpoint = ""

    def parse(self, arguments: dict) -> dict:
        return {
            "address": require(arguments, "address"),
            "page": optional_int(arguments, "page"),
            "sort": optional_sort(arguments),
        }

    def path(self, params: dict) -> str:
        return f"/address/{segment(params['address'])}/{self.endpoint}"

    def query(self, params: dict) -> dict:
        return drop_none({"page": params["page"], "sort": params["sort"]})


class InscriptionsActivityTool(AddressActivityTool):
    name = "ordiscan_inscriptions_activity"
    endpoint = "inscriptions/activity"

    def format(self, data, params):
        address = params["address"]
        events = []
        for event in data:
            sent = event.get("from_address") == address
            events.append({
                "inscription_id": event["inscription_id"],
                "tx_id": event["tx_id"],
                "type": "SEND" if sent else "RECEIVE",
                "counterpart": event["to_address"] if sent else (event.get("from_address") or "Genesis"),
                "timestamp": fmt.timestamp(event.get("timestamp")),
                "short_tx_id": fmt.short_id(event["tx_id"]),
                "short_inscription": fmt.short_id(event["inscription_id"]),
            })
        return {"total_events": len(events), "events": events}


class RunesActivityTool(AddressActivityTool):
    name = "ordiscan_runes_activity"
    endpoint = "runes/activity"

    def format(self, data, params):
        return {
            "total_events": len(data),
            "events": [
                {
                    "rune_id": event["rune_id"],
                    "type": event["type"],
                    "amount": event["amount"],
                    "from": event.get("from_address") or "Genesis",
                    "to": event["to_address"],
                    "timestamp": fmt.timestamp(event.get("timestamp")),
                    "tx_id": event["tx_id"],
                    "short_tx_id": fmt.short_id(event["tx_id"]),
                }
                for event in data
            ],
        }


class Brc20ActivityTool(AddressActivityTool):
    name = "ordiscan_brc20_activity"
    endpoint = "activity/brc20"

    def format(self, data, params):
        return {
            "total_events": len(data),
            "events": [
                {
                    "ticker": event["ticker"],
                    "type": event["type"],
                    "from": fmt.or_na(event.get("from_address")),
                    "to": event["to_address"],
                    "amount": event["amount"],
                    "amount_formatted": fmt.number(event["amount"]),
                    "inscription_id": event["inscription_id"],
                    "short_inscription": fmt.short_id(event["inscription_id"]),
                    "timestamp": fmt.timestamp(event.get("timestamp")),
                }
                for event in data
            ],
        }
