import re
from datetime import datetime
from types import SimpleNamespace

import pytest
from bson import Decimal128, ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from app import create_app
from utils.medicine_store import MedicineStore


def _matches_clause(value, condition):
    if isinstance(condition, dict) and "$regex" in condition:
        if not isinstance(value, str):
            return False
        flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
        return re.search(condition["$regex"], value, flags) is not None
    return value == condition


def _matches(document, query):
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(document, sub) for sub in condition):
                return False
        elif not _matches_clause(document.get(key), condition):
            return False
    return True


class FakeDatabase:
    def __init__(self, name, collections):
        self.name = name
        self.collections = collections

    def list_collection_names(self):
        return list(self.collections)


class FakeCollection:
    """In-memory stand-in for a pymongo collection.

    Understands equality, `$or`, `$regex` and `$options`; set `fail` to make
    every call raise like an unreachable server.
    """

    def __init__(self, name="medicineDB", documents=None):
        self.name = name
        self.documents = []
        self.fail = False
        self.calls = []
        self.database = FakeDatabase("medicines", [name])
        for doc in documents or []:
            self.insert_one(dict(doc))
        self.calls.clear()

    def _check(self, op, query=None):
        self.calls.append((op, query))
        if self.fail:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    def _select(self, query):
        return [dict(d) for d in self.documents if _matches(d, query or {})]

    def find(self, query=None):
        self._check("find", query)
        return iter(self._select(query))

    def find_one(self, query=None):
        self._check("find_one", query)
        found = self._select(query)
        return found[0] if found else None

    def insert_one(self, document):
        self._check("insert_one", document)
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return SimpleNamespace(inserted_id=document["_id"])


SAMPLE_MEDICINES = [
    {
        "product_name": "Insulin Pen",
        "sub_category": "Diabetes Care",
        "salt_composition": "Insulin Glargine (100IU)",
        "medicine_desc": "Long acting insulin for blood sugar control.",
    },
    {
        "product_name": "Paracetamol",
        "sub_category": "Pain Relief",
        "salt_composition": "Paracetamol (500mg)",
        "medicine_desc": "Fever and mild pain.",
    },
    {
        "product_name": "Vitamin   C Chewable",
        "sub_category": "Vitamins & Supplements",
        "salt_composition": "Ascorbic Acid (500mg)",
    },
]


@pytest.fixture
def collection():
    return FakeCollection(documents=SAMPLE_MEDICINES)


@pytest.fixture
def empty_collection():
    return FakeCollection()


@pytest.fixture
def store(collection):
    return MedicineStore(collection)


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def legacy_collection():
    """Documents written outside the API: non-text fields and BSON-only values."""
    return FakeCollection(documents=[
        {"product_name": "Insulin Pen"},
        {"product_name": "Legacy Syrup", "side_effects": ["nausea", "rash"], "sub_category": None},
        {
            "product_name": "Imported Tablet",
            "product_price": Decimal128("12.50"),
            "supplier_ref": ObjectId("64b7f0c2a1b2c3d4e5f60718"),
            "imported_at": datetime(2024, 3, 1, 9, 30),
            "medicine_desc": {"en": "Legacy syrup substitute"},
        },
    ])
