import logging
from flask import Blueprint, current_app, send_from_directory

logger = logging.getLogger(__name__)

# Blueprint for the landing page
page_router = Blueprint('page_router', __name__)


@page_router.route('/')
def index():
    """Serves the landing page with the URL form."""
    return send_from_directory(current_app.static_folder, 'index.html')
