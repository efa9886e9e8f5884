# =============================================================================
# tools/registry.py  -  The Ordiscan tool table
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Lists every tool the server advertises.  Each row is a ToolManifest:
#
#     name         → the MCP tool name clients call
#     loader       → "module:Class" handed to the provider on first use
#     description  → shown to clients in tools/list
#     parameters   → JSON schema shown to clients in tools/list
#
#   Building the catalog and registering the MCP tools reads ONLY this file.
#   No handler module is imported until its tool is called or warmed up.
#
# ADDING A TOOL:
#   Write the handler class in tools/handlers/, then add one row below.
# =============================================================================

from typing import Any

from core.catalog import CapabilityCatalog
from core.models import ToolManifest

_HANDLERS = "tools.handlers"


def _string(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _integer(description: str) -> dict[str, Any]:
    # Numeric arguments may also arrive as numeric strings.
    return {"type": ["integer", "string"], "description": description}


def _sort() -> dict[str, Any]:
    return {
        "type": "string",
        "enum": ["newest", "oldest"],
        "description": "Sort order: 'newest' or 'oldest' (default)",
    }


def _schema(required: tuple[str, ...] = (), **properties: dict[str, Any]) -> dict[str, Any]:
    properties["api_key"] = _string(
        "Your Ordiscan API key. If not provided, will use environment "
        "variable ORDISCAN_API_KEY"
    )
    return {"type": "object", "properties": properties, "required": list(required)}


def _tool(category: str, name: str, loader: str, description: str, parameters: dict) -> ToolManifest:
    return ToolManifest(
        name=name,
        loader=f"{_HANDLERS}.{loader}",
        description=description,
        parameters=parameters,
        category=category,
    )


_ADDRESS = _string("A valid Bitcoin address")
_TXID = _string("The transaction ID (txid)")
_UTXO = _string(
    "A valid Bitcoin UTXO (e.g. "
    "3d57f76284e17370f1ce45e75f68b5960906c4117951607f20ddd19f85c15706:0)"
)
_INSCRIPTION_ID = _string(
    "The inscription ID (e.g. "
    "b61b0172d95e266c18aea0c624db987e971a5d6d4ebc2aaed85da4642d635735i0)"
)
_DETAIL_PARAMS = _schema(
    number=_integer("The inscription number to get details for"),
    id=_string("The inscription ID to get details for (alternative to number)"),
)


TOOL_MANIFEST: list[ToolManifest] = [
    # --- Main ----------------------------------------------------------------
    _tool("Main", "ordiscan_main", "runes:RuneStatusTool",
          "Main Ordiscan API tool for general rune information and status",
          _schema(("rune_name",),
                  rune_name=_string("The unique name of the rune (without spacers)"),
                  block_height=_integer(
                      "Current block height for minting status calculation. "
                      "If not provided, will be fetched from API."))),

    # --- Address -------------------------------------------------------------
    _tool("Address", "ordiscan_address_utxo", "address:AddressUtxosTool",
          "Get all UTXOs owned by a Bitcoin address and their associated inscriptions and runes",
          _schema(("address",), address=_ADDRESS)),
    _tool("Address", "ordiscan_address_inscriptions", "address:AddressInscriptionsTool",
          "Get all inscription IDs owned by a Bitcoin address",
          _schema(("address",), address=_ADDRESS)),
    _tool("Address", "ordiscan_address_inscriptions_detail",
          "inscriptions:AddressInscriptionsDetailTool",
          "Get detailed information about an inscription by number or ID",
          _DETAIL_PARAMS),
    _tool("Address", "ordiscan_address_runes_balance", "address:AddressRunesBalanceTool",
          "Get all rune balances for a Bitcoin address",
          _schema(("address",), address=_ADDRESS)),
    _tool("Address", "ordiscan_address_brc20_balance", "address:AddressBrc20BalanceTool",
          "Get all BRC-20 token balances for a Bitcoin address",
          _schema(("address",), address=_ADDRESS)),
    _tool("Address", "ordiscan_address_rare_sats", "address:AddressRareSatsTool",
          "Get all rare sats owned by a Bitcoin address",
          _schema(("address",), address=_ADDRESS)),

    # --- Activity ------------------------------------------------------------
    _tool("Activity", "ordiscan_inscriptions_activity", "activity:InscriptionsActivityTool",
          "Get inscription transfer activity for an address",
          _schema(("address",), address=_string("Bitcoin address to get activity for"),
                  page=_integer("Page number for pagination (20 transfers per page)"),
                  sort=_sort())),
    _tool("Activity", "ordiscan_runes_activity", "activity:RunesActivityTool",
          "Get rune transfer activity for an address",
          _schema(("address",), address=_string("Bitcoin address to get activity for"),
                  page=_integer("Page number for pagination (20 transfers per page)"),
                  sort=_sort())),
    _tool("Activity", "ordiscan_brc20_activity", "activity:Brc20ActivityTool",
          "Get all BRC-20 token transaction activity for a Bitcoin address",
          _schema(("address",), address=_ADDRESS,
                  page=_integer("Page number for pagination (20 transfers per page)"),
                  sort=_sort())),

    # --- Transaction ---------------------------------------------------------
    _tool("Transaction", "ordiscan_tx_info", "transactions:TxInfoTool",
          "Get information about a Bitcoin transaction",
          _schema(("txid",), txid=_TXID)),
    _tool("Transaction", "ordiscan_tx_inscriptions", "transactions:TxInscriptionsTool",
          "Get all new inscriptions created in a Bitcoin transaction",
          _schema(("txid",), txid=_TXID)),
    _tool("Transaction", "ordiscan_tx_inscription_transfers",
          "transactions:TxInscriptionTransfersTool",
          "Get a list of all inscriptions transferred in the transaction",
          _schema(("txid",), txid=_TXID)),
    _tool("Transaction", "ordiscan_tx_runes", "transactions:TxRunesTool",
          "Get a list of all minted and transferred runes in the transaction",
          _schema(("txid",), txid=_TXID)),

    # --- Inscription ---------------------------------------------------------
    _tool("Inscription", "ordiscan_inscription_info", "inscriptions:InscriptionInfoTool",
          "Get detailed information about a specific inscription",
          _schema(("id",), id=_INSCRIPTION_ID)),
    _tool("Inscription", "ordiscan_inscription_traits", "inscriptions:InscriptionTraitsTool",
          "Get traits for a specific inscription",
          _schema(("id",), id=_INSCRIPTION_ID)),
    _tool("Inscription", "ordiscan_inscription_transfers",
          "inscriptions:InscriptionTransfersTool",
          "Get transfer history for an inscription",
          _schema(("id",), id=_string("The inscription ID to get transfers for"),
                  page=_integer("Page number for pagination (20 transfers per page)"))),
    _tool("Inscription", "ordiscan_inscriptions_list", "inscriptions:InscriptionsListTool",
          "Get a paginated list of all inscriptions",
          _schema(after=_integer("Get inscriptions after this number"),
                  before=_integer("Get inscriptions before this number"))),
    _tool("Inscription", "ordiscan_inscriptions_detail", "inscriptions:InscriptionsDetailTool",
          "Get detailed information about an inscription by number or ID",
          _DETAIL_PARAMS),

    # --- Collection ----------------------------------------------------------
    _tool("Collection", "ordiscan_collections_list", "collections:CollectionsListTool",
          "Get a paginated list of indexed collections",
          _schema(page=_integer("Page number for pagination (20 collections per page)"))),
    _tool("Collection", "ordiscan_collection_info", "collections:CollectionInfoTool",
          "Get detailed information about a specific collection",
          _schema(("slug",), slug=_string(
              "The unique identifier for a collection (e.g. taproot-wizards)"))),
    _tool("Collection", "ordiscan_collection_inscriptions",
          "collections:CollectionInscriptionsTool",
          "Get inscriptions in a collection",
          _schema(("slug",), slug=_string("The collection slug to get inscriptions for"),
                  page=_integer("Page number for pagination (20 inscriptions per page)"))),

    # --- Rune ----------------------------------------------------------------
    _tool("Rune", "ordiscan_runes_list", "runes:RunesListTool",
          "Get a paginated list of all runes",
          _schema(sort=_sort(),
                  after=_integer("Get runes after this number"),
                  before=_integer("Get runes before this number"),
                  block_height=_integer("Block height used to compute each rune's minting status"))),
    _tool("Rune", "ordiscan_rune_market", "runes:RuneMarketTool",
          "Get the latest price and market cap for a rune",
          _schema(("name",), name=_string("The unique name of the rune (without spacers)"))),
    _tool("Rune", "ordiscan_rune_name_unlock", "runes:RuneNameUnlockTool",
          "Check when a specific rune name becomes available to etch",
          _schema(("name",), name=_string("The desired name of the rune (without spacers)"))),

    # --- BRC-20 --------------------------------------------------------------
    _tool("BRC-20", "ordiscan_brc20_list", "brc20:Brc20ListTool",
          "Get a paginated list of BRC-20 tokens",
          _schema(sort=_sort(),
                  page=_integer("Page number for pagination (20 tokens per page)"))),
    _tool("BRC-20", "ordiscan_brc20_info", "brc20:Brc20InfoTool",
          "Get detailed information about a specific BRC-20 token",
          _schema(("tick",), tick=_string(
              "The unique tick of the token. Can be either uppercase or lowercase."))),

    # --- Sat -----------------------------------------------------------------
    _tool("Sat", "ordiscan_sat_info", "sats:SatInfoTool",
          "Get information about a specific satoshi",
          _schema(("ordinal",), ordinal=_integer(
              "The ordinal number of the satoshi (0 to 2099999997689999)"))),
    _tool("Sat", "ordiscan_utxo_rare_sats", "sats:UtxoRareSatsTool",
          "Get all the rare sats for a specific UTXO",
          _schema(("utxo",), utxo=_UTXO)),
    _tool("Sat", "ordiscan_utxo_sat_ranges", "sats:UtxoSatRangesTool",
          "Get all the sat ranges for a specific UTXO",
          _schema(("utxo",), utxo=_UTXO)),
]


def build_catalog() -> CapabilityCatalog:
    return CapabilityCatalog.from_manifest(TOOL_MANIFEST)


def summarize(manifest: list[ToolManifest] = TOOL_MANIFEST) -> dict[str, int]:
    """Tool counts per category, in table order (for the startup banner)."""
    counts: dict[str, int] = {}
    for entry in manifest:
        counts[entry.category] = counts.get(entry.category, 0) + 1
    return counts
