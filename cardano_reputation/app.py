# cardano_reputation/app.py
import logging
import os

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from cardano_reputation.ai_insight import InsightGenerator
from cardano_reputation.blockfrost_fetcher import BlockfrostFetcher
from cardano_reputation.config import Config
from cardano_reputation.errors import ReputationError, UpstreamError
from cardano_reputation.report_store import create_report_store, validate_report_payload
from cardano_reputation.reputation import ReputationService

logger = logging.getLogger(__name__)

CHECK_FAILED_MESSAGE = "Failed to check wallet reputation"

api = Blueprint("api", __name__, url_prefix="/api")


def configure_logging(app=None):
    log_dir = os.path.dirname(Config.LOG_FILE)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(Config.LOG_FILE, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )
    if app is not None:
        app.logger.handlers = logging.getLogger().handlers
        app.logger.setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))


def _json_body():
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _service() -> ReputationService:
    return current_app.extensions["reputation_service"]


# ---------------------------
# API ROUTES
# ---------------------------

@api.errorhandler(ReputationError)
def handle_reputation_error(error):
    if isinstance(error, UpstreamError):
        logger.error(
            f"Error checking wallet reputation: {error.message} "
            f"(status={error.upstream_status}, body={error.body})"
        )
        return jsonify({"error": CHECK_FAILED_MESSAGE}), error.status_code
    return jsonify({"error": error.message}), error.status_code


@api.route('/check-reputation', methods=['POST'])
def check_reputation():
    data = _json_body()
    try:
        result = _service().check(data.get('walletAddress'))
    except ReputationError:
        raise
    except Exception as e:
        logger.exception("Error checking wallet reputation: %s", e)
        return jsonify({"error": CHECK_FAILED_MESSAGE}), 500
    return jsonify(result)


@api.route('/report-wallet', methods=['POST'])
def report_wallet():
    data = _json_body()
    report = validate_report_payload(data)
    _service().report_store.append(report)
    return jsonify({"message": "Report submitted successfully"})


@api.route('/wallet-reports/<path:wallet_address>', methods=['GET'])
def wallet_reports(wallet_address):
    return jsonify(_service().report_store.partition(wallet_address))


def create_app(fetcher=None, report_store=None, insight_generator=None):
    """
    Application factory. Collaborators default to the ones described by Config;
    pass them explicitly to swap storage or to run against fakes.
    """
    app = Flask(__name__)
    app.json.ensure_ascii = False
    CORS(app)

    if report_store is None:
        report_store = create_report_store(Config.REPORT_STORE, Config.REPORTS_FILE, Config.DATABASE_URL)
    app.extensions["reputation_service"] = ReputationService(
        fetcher=fetcher or BlockfrostFetcher(),
        report_store=report_store,
        insight_generator=insight_generator or InsightGenerator(),
    )
    app.register_blueprint(api)
    return app


def main():
    app = create_app()
    configure_logging(app)
    if not Config.ai_enabled():
        logger.info("GEMINI_API_KEY not set; AI insight disabled.")
    logger.info(f"Cardano reputation API starting on {Config.API_HOST}:{Config.API_PORT}")
    app.run(host=Config.API_HOST, port=Config.API_PORT, debug=False)


# --- MAIN EXECUTION ---
if __name__ == '__main__':
    main()
