# =============================================================================
# tools/handlers/brc20.py  -  BRC-20 tokens
# =============================================================================

from tools.handlers import formatting as fmt
from tools.handlers.base import OrdiscanTool, drop_none, optional_int, optional_sort, require, segment

PAGE_SIZE = 20


def mint_progress(token: dict) -> str:
    minted = token.get("minted") or 0
    if minted == 0:
        return "Not minted"
    if minted == token.get("max_supply"):
        return "Fully minted"
    return "Minting in progress"


class Brc20ListTool(OrdiscanTool):
    name = "ordiscan_brc20_list"

    def parse(self, arguments: dict) -> dict:
        return {
            "sort": optional_sort(arguments),
            "page": optional_int(arguments, "page"),
        }

    def path(self, params: dict) -> str:
        return "/brc20"

    def query(self, params: dict) -> dict:
        return drop_none(params)

    def format(self, data, params):
        tokens = []
        for token in data:
            price = token.get("price")
            tokens.append({
                "tick": token["tick"],
                "supply": {
                    "max": fmt.number(token["max_supply"]),
                    "minted": fmt.number(token["minted"]),
                    "percent_minted": fmt.percent(token["minted"], token["max_supply"]),
                },
                "price": {
                    "usd": fmt.usd(price),
                    "market_cap": fmt.usd(price * token["minted"]),
                } if price else None,
                "status": mint_progress(token),
            })
        return {
            "total_tokens": len(tokens),
            "tokens": tokens,
            "page_info": {
                "current_page": params.get("page") or 1,
                "items_per_page": PAGE_SIZE,
                "has_more": len(data) == PAGE_SIZE,
            },
        }


class Brc20InfoTool(OrdiscanTool):
    name = "ordiscan_brc20_info"

    def parse(self, arguments: dict) -> dict:
        return {"tick": require(arguments, "tick")}

    def path(self, params: dict) -> str:
        return f"/brc20/{segment(params['tick'])}"

    def format(self, data, params):
        max_supply = data["max_supply"]
        minted = data["minted"]
        price = data.get("price")
        if minted == 0:
            minting = "Not started"
        elif minted == max_supply:
            minting = "Completed"
        else:
            minting = "In progress"
        return {
            "tick": data["tick"],
            "supply": {
                "max": fmt.number(max_supply),
                "minted": fmt.number(minted),
                "remaining": fmt.number(max_supply - minted),
                "percent_minted": fmt.percent(minted, max_supply),
            },
            "market": {
                "price_usd": fmt.usd(price),
                "market_cap_usd": fmt.usd(price * minted),
                "fully_diluted_market_cap_usd": fmt.usd(price * max_supply),
            } if price else None,
            "status": {
                "minting": minting,
                "price": "Trading" if price else "No market data",
            },
        }
