from flask import Flask, Blueprint, request, jsonify
from werkzeug.exceptions import HTTPException
import atexit

# --- Services & Utils ---
from utils.config import Config
from utils.json_provider import MongoJSONProvider
from utils.medicine_store import MedicineStore
from utils.utils import setup_logger
from services.medicine_service import MedicineService

logger = setup_logger(__name__)


def create_medicine_blueprint(service):
    bp = Blueprint("medicines", __name__, url_prefix="/api/medicines")

    def respond(result):
        payload, status = result
        return jsonify(payload), status

    @bp.route('/', methods=['GET'])
    def list_medicines():
        return respond(service.list_medicines())

    @bp.route('/', methods=['POST'])
    def add_medicine():
        body = request.get_json(silent=True)
        if body is None and request.get_data():
            return jsonify({"message": "Request body must be valid JSON"}), 400
        return respond(service.add_medicine(body))

    @bp.route('/search', methods=['GET'])
    def flexible_search():
        return respond(service.flexible_search(request.args))

    @bp.route('/search/smart', methods=['GET'])
    def smart_search():
        return respond(service.smart_search(request.args))

    @bp.route('/search/name', methods=['GET'])
    def search_by_name():
        return respond(service.search_by_name(request.args))

    @bp.route('/search/category', methods=['GET'])
    def search_by_category():
        return respond(service.search_by_category(request.args))

    @bp.route('/name', methods=['GET'])
    def get_medicine_by_name():
        return respond(service.get_medicine_by_name(request.args))

    # --- Debug ---
    @bp.route('/debug/all', methods=['GET'])
    def debug_all():
        return respond(service.debug_all())

    @bp.route('/debug/test', methods=['GET'])
    def debug_test():
        return respond(service.debug_test())

    return bp


def create_app(store=None):
    app = Flask(__name__)
    app.json = MongoJSONProvider(app)

    if store is None:
        Config.validate()
        store = MedicineStore.from_config()
        store.check_collection()
        atexit.register(store.close)

    app.register_blueprint(create_medicine_blueprint(MedicineService(store)))

    # --- Error Handling ---
    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"message": "Route not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"message": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"message": "Server error", "error": "Internal server error"}), 500

    @app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return jsonify({"message": e.description}), e.code
        logger.error(f"Unhandled Exception: {e}", exc_info=True)
        return jsonify({"message": "Server error", "error": "Internal server error"}), 500

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, debug=Config.FLASK_DEBUG)
