import os
from dotenv import load_dotenv
import certifi

load_dotenv()

def _as_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")

class Config:
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "medicines")
    MEDICINE_COLLECTION = os.getenv("MEDICINE_COLLECTION", "medicineDB")
    MONGO_TLS = _as_bool(os.getenv("MONGO_TLS", "false"))

    FLASK_HOST = os.getenv("FLASK_HOST", "127.0.0.1")
    FLASK_PORT = int(os.getenv("FLASK_PORT", "5000"))
    FLASK_DEBUG = _as_bool(os.getenv("FLASK_DEBUG", "false"))

    @staticmethod
    def get_tls_kwargs():
        """Get TLS/SSL kwargs for MongoClient"""
        kwargs = {
            "serverSelectionTimeoutMS": 5000,
            "connectTimeoutMS": 5000,
            "socketTimeoutMS": 5000
        }
        # Atlas clusters (mongodb+srv) always speak TLS
        if Config.MONGO_TLS or Config.MONGO_URI.startswith("mongodb+srv://"):
            kwargs["tlsCAFile"] = certifi.where()
        return kwargs

    @staticmethod
    def validate():
        """Validate that the database settings are present."""
        if not Config.MONGO_URI:
            raise ValueError("MONGO_URI is missing in .env")
        if not Config.MEDICINE_COLLECTION:
            raise ValueError("MEDICINE_COLLECTION must not be empty")
