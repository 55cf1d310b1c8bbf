"""
HTTP Server

Flask application exposing review scope resolution.
"""

import logging
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError

from . import __version__
from .api import ReviewScopeAPI
from .models.review_scope import ScopeRequest


logger = logging.getLogger(__name__)


def create_app(scope_api: Optional[ReviewScopeAPI] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        scope_api: API instance; built from the global config when omitted
    """
    app = Flask(__name__)
    CORS(app)  # Enable CORS for frontend

    api = scope_api or ReviewScopeAPI()

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        health = api.get_system_health()
        health.update({'service': 'ai-pr-review-scope', 'version': __version__})
        return jsonify(health)

    @app.route('/api/v1/reviews/scope', methods=['POST'])
    def resolve_scope():
        """Resolve the files and hunks to review for a PR."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object', 'status': 'failed'}), 400

        try:
            scope_request = ScopeRequest(**data)
        except (ValidationError, ValueError) as e:
            return jsonify({'error': str(e), 'status': 'failed'}), 400

        result = api.resolve_scope(scope_request)

        status_code = 200 if result.status == 'completed' else 502
        return jsonify(result.to_dict()), status_code

    return app
