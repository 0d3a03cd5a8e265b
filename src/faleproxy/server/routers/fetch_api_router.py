import logging
from flask import Blueprint, jsonify, request, current_app

logger = logging.getLogger(__name__)

fetch_api_router = Blueprint('fetch_api_router', __name__)


# --- HELPER FUNCTIONS ---

def get_fetch_controller():
    """Retrieves the fetch controller from the Flask application context."""
    controller = current_app.config.get('FETCH_CONTROLLER')
    if not controller:
        raise RuntimeError("FetchController is not set in app.config['FETCH_CONTROLLER']")
    return controller


def _requested_url() -> str:
    """Reads 'url' from a JSON body or, failing that, from form fields."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        url = payload.get('url')
    else:
        url = request.form.get('url')
    return url.strip() if isinstance(url, str) else ""


# --- API ROUTES ---

@fetch_api_router.route('/fetch', methods=['POST'])
def fetch():
    """
    Fetches the requested page and returns it with Yale replaced by Fale.
    Any failure while downloading or rewriting is reported as a 500.
    """
    url = _requested_url()
    if not url:
        return jsonify({"error": "URL is required"}), 400

    try:
        return jsonify(get_fetch_controller().fetch_and_transform(url))
    except Exception as e:
        logger.error(f"Error fetching URL {url}: {e}", exc_info=True)
        return jsonify({"error": f"Failed to fetch content: {e}"}), 500
