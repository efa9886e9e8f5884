# =============================================================================
# tools/handlers/transactions.py  -  Transaction lookups
# =============================================================================
#
# Everything keyed by a txid: the transaction itself, the inscriptions it
# created, the inscriptions it moved, and the runes it minted/transferred.
# =============================================================================

from tools.handlers import formatting as fmt
from tools.handlers.base import OrdiscanTool, require, segment


class TransactionTool(OrdiscanTool):
    endpoint = ""

    def parse(self, arguments: dict) -> dict:
        return {"txid": require(arguments, "txid")}

    def path(self, params: dict) -> str:
        suffix = f"/{self.endpoint}" if self.endpoint else ""
        return f"/tx/{segment(params['txid'])}{suffix}"


class TxInfoTool(TransactionTool):
    name = "ordiscan_tx_info"

    def format(self, data, params):
        return {
            "txid": data["txid"],
            "fee_sats": fmt.number(data["fee"]),
            "size_bytes": fmt.number(data["size"]),
            "weight_units": fmt.number(data["weight"]),
            "status": "confirmed" if data.get("confirmed") else "pending",
            "block_hash": fmt.or_na(data.get("block_hash")),
            "indexing_status": "indexed" if data.get("indexed") else "indexing",
            "content": {
                "has_inscriptions": data.get("has_inscriptions", False),
                "has_inscription_transfers": data.get("has_inscription_transfers", False),
                "has_runes": data.get("has_runes", False),
            },
        }


class TxInscriptionsTool(TransactionTool):
    name = "ordiscan_tx_inscriptions"
    endpoint = "inscriptions"

    def format(self, data, params):
        return {
            "total_inscriptions": len(data),
            "inscriptions": [
                {
                    "id": item["inscription_id"],
                    "number": item["inscription_number"],
                    "type": item["content_type"],
                    "timestamp": fmt.timestamp(item.get("timestamp")),
                    "sat": fmt.number(item.get("sat")),
                    "content_url": item.get("content_url"),
                    "owner": {
                        "address": item.get("owner_address"),
                        "output": item.get("owner_output"),
                    },
                    "genesis": {
                        "address": item.get("genesis_address"),
                        "output": item.get("genesis_output"),
                    },
                    "parent": fmt.or_na(item.get("parent_inscription_id")),
                    "short_id": fmt.short_id(item["inscription_id"]),
                }
                for item in data
            ],
        }


class TxInscriptionTransfersTool(TransactionTool):
    name = "ordiscan_tx_inscription_transfers"
    endpoint = "inscription-transfers"

    def format(self, data, params):
        return [
            {
                "inscription_id": transfer["inscription_id"],
                "from": transfer.get("from_address"),
                "to": transfer.get("to_address"),
                "status": "Confirmed" if transfer.get("confirmed") else "Pending",
                "timestamp": transfer.get("timestamp") or "Pending confirmation",
                "spent_as_fee": "Yes" if transfer.get("spent_as_fee") else "No",
            }
            for transfer in data
        ]


class TxRunesTool(TransactionTool):
    name = "ordiscan_tx_runes"
    endpoint = "runes"

    def format(self, data, params):
        outputs = data.get("outputs") or []
        transfers = []
        # Inputs and outputs are paired by position.
        for index, runic_input in enumerate(data.get("inputs") or []):
            output = outputs[index] if index < len(outputs) else None
            transfers.append({
                "rune": runic_input["rune"],
                "amount": runic_input["rune_amount"],
                "from": runic_input["address"],
                "to": output["address"] if output else "Unknown",
                "output_index": output["vout"] if output else None,
            })
        return {
            "transaction": data["txid"],
            "timestamp": data.get("timestamp"),
            "actions": [
                {"rune": message["rune"], "action": message["type"]}
                for message in data.get("runestone_messages") or []
            ],
            "transfers": transfers,
        }
