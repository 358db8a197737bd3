from __future__ import annotations

import json
from typing import Any, List, Optional

import httpx


def names_from_csv(raw: str) -> List[str]:
    return [n.strip() for n in raw.split(",") if n.strip()]


def parse_roster(text: str) -> List[str]:
    """
    Supports:
    1) Raw text, one name per line
    2) JSON containing:
       - ["Alice", "Bob"]
       - {"participants": ["Alice", "Bob"]}
       - {"participants": [{"name": "Alice", ...}, ...]}  (a saved wheel state)
    """
    raw = text.strip()
    if not raw:
        return []

    if raw[0] not in "[{":
        return [line.strip() for line in raw.splitlines() if line.strip()]

    try:
        j = json.loads(raw)
    except ValueError as e:
        raise RuntimeError(f"Roster is not valid JSON or plain text: {e}")

    items: Optional[List[Any]] = None
    if isinstance(j, list):
        items = j
    elif isinstance(j, dict) and isinstance(j.get("participants"), list):
        items = j["participants"]

    if items is not None:
        names: List[str] = []
        for item in items:
            if isinstance(item, str):
                name = item
            elif isinstance(item, dict) and isinstance(item.get("name"), str):
                name = item["name"]
            else:
                raise RuntimeError(f"Unrecognised roster entry: {item!r}")
            if name.strip():
                names.append(name.strip())
        return names

    raise RuntimeError(
        "Could not find participants in roster. "
        "Expected plain text, a JSON list, or JSON with a participants list."
    )


def load_roster_file(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_roster(f.read())


class RosterClient:
    def __init__(self, timeout_s: float = 30.0, transport: httpx.BaseTransport | None = None) -> None:
        self.client = httpx.Client(timeout=timeout_s, transport=transport)

    def close(self) -> None:
        self.client.close()

    def fetch_names(self, url: str) -> List[str]:
        """Names from a `participants=a,b,c` query string, else from the document at `url`."""
        param = httpx.URL(url).params.get("participants")
        if param is not None:
            return names_from_csv(param)

        resp = self.client.get(url)
        resp.raise_for_status()
        return parse_roster(resp.text)
