from datetime import date, datetime

from bson import Decimal128, ObjectId
from flask.json.provider import DefaultJSONProvider


class MongoJSONProvider(DefaultJSONProvider):
    """Flask JSON provider that renders BSON values the way the API clients expect."""

    sort_keys = False

    @staticmethod
    def default(o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, Decimal128):
            return str(o.to_decimal())
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        return DefaultJSONProvider.default(o)
