# =============================================================================
# tools/handlers/address.py  -  Address holdings
# =============================================================================
#
# Everything a Bitcoin address owns: UTXOs, inscription ids, rune and BRC-20
# balances, rare sats.
# =============================================================================

from tools.handlers import formatting as fmt
from tools.handlers.base import OrdiscanTool, require, segment


class AddressTool(OrdiscanTool):
    """Tools that take a single `address` argument."""

    endpoint = ""

    def parse(self, arguments: dict) -> dict:
        return {"address": require(arguments, "address")}

    def path(self, params: dict) -> str:
        return f"/address/{segment(params['address'])}/{self.endpoint}"


class AddressUtxosTool(AddressTool):
    name = "ordiscan_address_utxo"
    endpoint = "utxos"

    def format(self, data, params):
        return [
            {
                "outpoint": utxo["outpoint"],
                "value_sats": utxo["value"],
                "value_btc": fmt.btc(utxo["value"]),
                "rune_count": len(utxo.get("runes") or []),
                "inscription_count": len(utxo.get("inscriptions") or []),
                "has_runes": bool(utxo.get("runes")),
                "has_inscriptions": bool(utxo.get("inscriptions")),
            }
            for utxo in data
        ]


class AddressInscriptionsTool(AddressTool):
    name = "ordiscan_address_inscriptions"
    endpoint = "inscription-ids"

    def format(self, data, params):
        return {
            "total_inscriptions": len(data),
            "inscriptions": [{"id": i, "short_id": fmt.short_id(i)} for i in data],
        }


class AddressRunesBalanceTool(AddressTool):
    name = "ordiscan_address_runes_balance"
    endpoint = "runes"

    def format(self, data, params):
        return {
            "total_runes": len(data),
            "runes": [
                {
                    "name": rune["name"],
                    "balance": rune["balance"],
                    "balance_formatted": fmt.number(rune["balance"]),
                }
                for rune in data
            ],
        }


class AddressBrc20BalanceTool(AddressTool):
    name = "ordiscan_address_brc20_balance"
    endpoint = "brc20"

    def format(self, data, params):
        return {
            "total_tokens": len(data),
            "tokens": [
                {
                    "tick": token["tick"],
                    "balance": token["balance"],
                    "balance_formatted": fmt.number(token["balance"]),
                }
                for token in data
            ],
        }


class AddressRareSatsTool(AddressTool):
    name = "ordiscan_address_rare_sats"
    endpoint = "rare-sats"

    def format(self, data, params):
        total = sum(end - start for group in data for start, end in group["ranges"])
        return {
            "total_rare_sats": total,
            "categories": [
                {
                    "satributes": group["satributes"],
                    "ranges": [
                        {
                            "start": fmt.number(start),
                            "end": fmt.number(end),
                            "count": fmt.number(end - start),
                        }
                        for start, end in group["ranges"]
                    ],
                }
                for group in data
            ],
        }
