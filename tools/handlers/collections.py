# =============================================================================
# tools/handlers/collections.py  -  Inscription collections
# =============================================================================

import re
from typing import Optional

from tools.handlers import formatting as fmt
from tools.handlers.base import OrdiscanTool, drop_none, optional_int, require, segment
from tools.handlers.inscriptions import inscription_summary

_TWITTER_HANDLE = re.compile(r"(?:twitter|x)\.com/([^/?#]+)")
_DISCORD_INVITE = re.compile(r"discord\.(?:gg|com/invite)/([^/?#]+)")


def twitter_handle(url: str) -> str:
    match = _TWITTER_HANDLE.search(url)
    return f"@{match.group(1)}" if match else url


def discord_invite(url: str) -> str:
    match = _DISCORD_INVITE.search(url)
    return match.group(1) if match else url


def _has_social(collection: dict) -> bool:
    return bool(
        collection.get("twitter_link")
        or collection.get("discord_link")
        or collection.get("website_link")
    )


class CollectionsListTool(OrdiscanTool):
    name = "ordiscan_collections_list"

    def parse(self, arguments: dict) -> dict:
        return {"page": optional_int(arguments, "page")}

    def path(self, params: dict) -> str:
        return "/collections"

    def query(self, params: dict) -> dict:
        return drop_none(params)

    def format(self, data, params):
        return {
            "total_collections": len(data),
            "collections": [
                {
                    "name": collection["name"],
                    "slug": collection["slug"],
                    "description": collection.get("description"),
                    "items": fmt.number(collection.get("item_count")),
                    "links": {
                        "twitter": fmt.or_na(collection.get("twitter_link")),
                        "discord": fmt.or_na(collection.get("discord_link")),
                        "website": fmt.or_na(collection.get("website_link")),
                    },
                    "has_social": {
                        "twitter": bool(collection.get("twitter_link")),
                        "discord": bool(collection.get("discord_link")),
                        "website": bool(collection.get("website_link")),
                    },
                }
                for collection in data
            ],
        }


class CollectionInfoTool(OrdiscanTool):
    name = "ordiscan_collection_info"

    def parse(self, arguments: dict) -> dict:
        return {"slug": require(arguments, "slug")}

    def path(self, params: dict) -> str:
        return f"/collection/{segment(params['slug'])}"

    def format(self, data, params):
        twitter: Optional[str] = data.get("twitter_link")
        discord: Optional[str] = data.get("discord_link")
        return {
            "name": data["name"],
            "slug": data["slug"],
            "description": data.get("description"),
            "stats": {
                "total_items": fmt.number(data.get("item_count")),
                "has_social_presence": _has_social(data),
            },
            "links": {
                "twitter": {"url": twitter, "handle": twitter_handle(twitter)} if twitter else None,
                "discord": {"url": discord, "invite_code": discord_invite(discord)} if discord else None,
                "website": data.get("website_link") or None,
            },
        }


class CollectionInscriptionsTool(OrdiscanTool):
    name = "ordiscan_collection_inscriptions"

    def parse(self, arguments: dict) -> dict:
        return {
            "slug": require(arguments, "slug"),
            "page": optional_int(arguments, "page"),
        }

    def path(self, params: dict) -> str:
        return f"/collection/{segment(params['slug'])}/inscriptions"

    def query(self, params: dict) -> dict:
        return drop_none({"page": params["page"]})

    def format(self, data, params):
        inscriptions = []
        for item in data:
            view = inscription_summary(item)
            view["genesis"] = {
                "address": item.get("genesis_address"),
                "block": item.get("genesis_block_height"),
                "fee": item.get("genesis_fee"),
                "timestamp": fmt.timestamp(item.get("genesis_timestamp")),
            }
            view["sat"] = {
                "ordinal": item.get("sat_ordinal"),
                "rarity": item.get("sat_rarity"),
                "coinbase_height": item.get("sat_coinbase_height"),
            }
            inscriptions.append(view)
        return {"total_inscriptions": len(inscriptions), "inscriptions": inscriptions}
