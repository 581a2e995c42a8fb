import json
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

FALLBACK_RADIO = MappingProxyType({
    "message": "Unknown selection",
    "color": "#999",
    "emoji": "❓",
})


def iso_now() -> str:
    """UTC timestamp in the browser's toISOString() shape, e.g. 2026-01-01T00:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def load_tables(path: Path) -> Tuple[Mapping[str, Mapping], Mapping[str, Mapping]]:
    """
    Returns (radio_responses, users) as read-only mappings.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    radio = {k: MappingProxyType(dict(v)) for k, v in data.get("radio", {}).items()}
    users = {k: MappingProxyType(dict(v)) for k, v in data.get("users", {}).items()}
    return MappingProxyType(radio), MappingProxyType(users)


def checkbox_message(items: List[str]) -> str:
    count = len(items)
    if count == 0:
        return "Nothing selected"
    if count == 1:
        return f"{items[0]} was selected"
    if count == 2:
        return f"{' and '.join(map(str, items))} were selected"
    return f"All selected: {', '.join(map(str, items))}"


def radio_response(selected: str, table: Mapping[str, Mapping]) -> Dict[str, str]:
    # anything that is not a plain string id, lists included, is unknown
    if not isinstance(selected, str):
        return dict(FALLBACK_RADIO)
    return dict(table.get(selected, FALLBACK_RADIO))


def select_message(selected: str) -> str:
    return f"{selected} was selected"


class SubmissionStore:
    """
    Append-only list of form submissions for the lifetime of one app instance.
    """

    def __init__(self):
        self._items: List[Dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._items)

    def add(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        # assigned id/submittedAt win over submitted keys of the same name
        submission = {"id": len(self._items) + 1}
        submission.update((k, v) for k, v in fields.items() if k not in ("id", "submittedAt"))
        submission["submittedAt"] = iso_now()
        self._items.append(submission)
        return dict(submission)

    def all(self) -> List[Dict[str, Any]]:
        return [dict(s) for s in self._items]

    def clear(self):
        self._items.clear()
