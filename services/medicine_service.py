from functools import wraps
from typing import Dict, Tuple

from services.query_builder import (
    SMART_SEARCH_FIELDS,
    build_escaped_flexible_filter,
    build_multi_field_filter,
    build_single_field_filter,
)
from services.validator import Validator
from utils.errors import NotFoundError, StoreError, ValidationError
from utils.models import Medicine
from utils.utils import setup_logger

logger = setup_logger(__name__)

Response = Tuple[object, int]

DEBUG_TEST_NAME = "Insulin"


def handle_errors(failure_message):
    """Turn the error taxonomy into (payload, status) at the handler boundary.

    Store failures are logged in full but the client only sees a generic label.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except (ValidationError, NotFoundError) as e:
                return {"message": e.message}, e.status_code
            except StoreError as e:
                logger.error(f"{f.__name__} failed: {e.message}", exc_info=True)
                return {"message": failure_message, "error": "Internal server error"}, 500
        return decorated_function
    return decorator


class MedicineService:
    """Request handlers for the medicine collection.

    Each method takes the query parameters (or body) of one request and
    returns a `(payload, status)` pair ready for jsonify.
    """

    def __init__(self, store):
        self.store = store

    def _find_mapped(self, query: Dict):
        return [Medicine.from_document(doc) for doc in self.store.find(query)]

    @handle_errors("Error fetching medicines")
    def list_medicines(self) -> Response:
        medicines = self._find_mapped({})
        logger.info(f"Listed {len(medicines)} medicines")
        return medicines, 200

    @handle_errors("Server error")
    def get_medicine_by_name(self, params) -> Response:
        name = Validator.require_param(params, "name", "Missing required query parameter: name")
        doc = self.store.find_one(build_single_field_filter("product_name", name))
        if not doc:
            raise NotFoundError("Medicine not found")
        return Medicine.from_document(doc), 200

    @handle_errors("Server error")
    def search_by_name(self, params) -> Response:
        name = Validator.require_param(params, "name")
        medicines = self._find_mapped(build_single_field_filter("product_name", name))
        if not medicines:
            raise NotFoundError("No medicines found for this name")
        return medicines, 200

    @handle_errors("Server error")
    def search_by_category(self, params) -> Response:
        sub_category = Validator.require_param(params, "sub_category")
        medicines = self._find_mapped(build_single_field_filter("sub_category", sub_category))
        if not medicines:
            raise NotFoundError("No medicines found for this sub category")
        return medicines, 200

    @handle_errors("Server error")
    def smart_search(self, params) -> Response:
        query = Validator.require_param(params, "query", "Missing 'query' parameter")
        medicines = self._find_mapped(build_multi_field_filter(SMART_SEARCH_FIELDS, query))
        if not medicines:
            logger.info(f"No matches found for: {query!r}")
            raise NotFoundError("No matches found")
        logger.info(f"Found {len(medicines)} matches for {query!r}")
        return medicines, 200

    @handle_errors("Server error")
    def flexible_search(self, params) -> Response:
        logger.debug(f"Raw query param: {params.get('query')!r}")
        query = Validator.require_param(params, "query", "Missing 'query' parameter")

        search_filter = build_escaped_flexible_filter(SMART_SEARCH_FIELDS, query)
        logger.debug(f"Final MongoDB filter: {search_filter}")

        medicines = self._find_mapped(search_filter)
        if not medicines:
            logger.info(f"No matching results found for: {query!r}")
            raise NotFoundError("No matches found")

        logger.info(f"{len(medicines)} documents found for {query!r}, first: {medicines[0].get('product_name')!r}")
        return {"success": True, "count": len(medicines), "data": medicines}, 200

    @handle_errors("Error adding medicine")
    def add_medicine(self, body) -> Response:
        medicine = Medicine.from_request(body)
        created = self.store.insert(medicine.to_document())
        return {"message": "Medicine added successfully", "data": Medicine.from_document(created)}, 201

    @handle_errors("Server error")
    def debug_all(self) -> Response:
        docs = self.store.find_raw()
        logger.info(f"Found {len(docs)} raw docs in collection")
        return docs, 200

    @handle_errors("Server error")
    def debug_test(self) -> Response:
        docs = self._find_mapped(build_single_field_filter("product_name", DEBUG_TEST_NAME))
        logger.info(f"Model test found: {len(docs)}")
        return {"count": len(docs), "docs": docs}, 200
