"""Shared shop state: seven JSON collections persisted one row per key.

The whole tree lives in memory on the application object. Every mutation
replaces a full collection list and writes that collection back as a JSON
array; there is no envelope, version tag or cross-collection transaction.
"""

import copy
import json
import logging

from flask import current_app

from errors import NotFound
from extensions import db
from models import StateBlob

logger = logging.getLogger(__name__)

WORK_ORDERS = "workOrders"
INVENTORY = "inventory"
CUSTOMERS = "customers"
VENDORS = "vendors"
SCHEMATICS = "schematics"
PARTS_ORDERS = "partsOrders"
APPOINTMENTS = "appointments"

COLLECTIONS = (WORK_ORDERS, INVENTORY, CUSTOMERS, VENDORS, SCHEMATICS, PARTS_ORDERS, APPOINTMENTS)


def dump_collection(items: list) -> str:
    return json.dumps(items, ensure_ascii=False)


def parse_collection(payload: str) -> list:
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return data


def load_collection(key: str, default: list) -> list:
    """Stored collection, or a copy of ``default`` when missing or unreadable."""
    row = db.session.get(StateBlob, key)
    if row is None:
        return copy.deepcopy(default)
    try:
        return parse_collection(row.payload)
    except ValueError as exc:  # json.JSONDecodeError is a ValueError
        logger.error("Error loading %s from storage, using seed data: %s", key, exc)
        return copy.deepcopy(default)


def save_collection(key: str, items: list) -> None:
    row = db.session.get(StateBlob, key)
    if row is None:
        row = StateBlob(key=key, payload=dump_collection(items))
        db.session.add(row)
    else:
        row.payload = dump_collection(items)
    db.session.commit()


class ShopState:
    """In-memory tree of all collections with write-through persistence."""

    def __init__(self, data: dict[str, list]):
        self._data = {key: list(data.get(key, [])) for key in COLLECTIONS}

    @classmethod
    def hydrate(cls) -> "ShopState":
        from seed_data import seed_collections

        seed = seed_collections()
        return cls({key: load_collection(key, seed[key]) for key in COLLECTIONS})

    def __getitem__(self, key: str) -> list:
        return self._data[key]

    # ---- collection access ----
    @property
    def work_orders(self) -> list:
        return self._data[WORK_ORDERS]

    @property
    def inventory(self) -> list:
        return self._data[INVENTORY]

    @property
    def customers(self) -> list:
        return self._data[CUSTOMERS]

    @property
    def vendors(self) -> list:
        return self._data[VENDORS]

    @property
    def schematics(self) -> list:
        return self._data[SCHEMATICS]

    @property
    def parts_orders(self) -> list:
        return self._data[PARTS_ORDERS]

    @property
    def appointments(self) -> list:
        return self._data[APPOINTMENTS]

    # ---- whole-array updates ----
    def replace(self, key: str, items) -> list:
        if key not in self._data:
            raise KeyError(key)
        items = list(items)
        self._data[key] = items
        save_collection(key, items)
        return items

    def get(self, key: str, item_id: str) -> dict:
        for item in self._data[key]:
            if item.get("id") == item_id:
                return item
        raise NotFound(f"{key}: no record with id {item_id!r}")

    def prepend(self, key: str, item: dict) -> dict:
        self.replace(key, [item, *self._data[key]])
        return item

    def append(self, key: str, item: dict) -> dict:
        self.replace(key, [*self._data[key], item])
        return item

    def update(self, key: str, item: dict) -> dict:
        self.get(key, item["id"])
        self.replace(key, [item if old.get("id") == item["id"] else old for old in self._data[key]])
        return item

    def remove(self, key: str, item_id: str) -> None:
        self.get(key, item_id)
        self.replace(key, [old for old in self._data[key] if old.get("id") != item_id])

    def reset(self) -> None:
        from seed_data import seed_collections

        for key, items in seed_collections().items():
            self.replace(key, items)


def init_state(app) -> ShopState:
    with app.app_context():
        state = ShopState.hydrate()
    app.extensions["shop_state"] = state
    return state


def get_state() -> ShopState:
    return current_app.extensions["shop_state"]
