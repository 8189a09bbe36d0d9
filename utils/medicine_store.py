from typing import Dict, List, Optional
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from utils.config import Config
from utils.errors import StoreError
from utils.utils import setup_logger

logger = setup_logger(__name__)


def _stringify_id(document):
    if document is not None and "_id" in document:
        document["_id"] = str(document["_id"])
    return document


class MedicineStore:
    """Thin adapter over the medicine collection.

    Every pymongo failure is re-raised as StoreError so callers only deal
    with one error type. Returned documents carry `_id` as a string.
    """

    def __init__(self, collection, client=None):
        self.collection = collection
        self.client = client

    @classmethod
    def from_config(cls):
        client = MongoClient(Config.MONGO_URI, **Config.get_tls_kwargs())
        db = client.get_database(Config.MONGO_DB_NAME)
        collection = db[Config.MEDICINE_COLLECTION]
        logger.info(f"MongoDB client ready for {Config.MONGO_DB_NAME}.{Config.MEDICINE_COLLECTION}")
        return cls(collection, client=client)

    def find(self, query: Optional[Dict] = None) -> List[Dict]:
        try:
            return [_stringify_id(doc) for doc in self.collection.find(query or {})]
        except PyMongoError as e:
            raise StoreError(f"find failed: {e}") from e

    def find_one(self, query: Dict) -> Optional[Dict]:
        try:
            return _stringify_id(self.collection.find_one(query))
        except PyMongoError as e:
            raise StoreError(f"find_one failed: {e}") from e

    def find_raw(self) -> List[Dict]:
        return self.find({})

    def insert(self, document: Dict) -> Dict:
        stored = dict(document)
        try:
            result = self.collection.insert_one(stored)
        except PyMongoError as e:
            raise StoreError(f"insert failed: {e}") from e
        stored["_id"] = str(result.inserted_id)
        logger.info(f"Inserted medicine {stored['_id']} ({stored.get('product_name', 'unnamed')})")
        return stored

    def check_collection(self) -> bool:
        """Log whether the configured collection exists in the active database."""
        name = self.collection.name
        try:
            collections = self.collection.database.list_collection_names()
        except PyMongoError as e:
            logger.error(f"Could not list collections: {e}")
            return False
        logger.info(f"Active database: {self.collection.database.name}, collections: {collections}")
        if name in collections:
            logger.info(f"'{name}' collection found")
            return True
        logger.warning(f"'{name}' collection NOT found in this database")
        return False

    def close(self):
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB client closed")
