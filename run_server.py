#!/usr/bin/env python3
"""
AI PR Review Scope Server

Simple Flask server to run the review scope resolver.
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from review_scope.config import get_config
from review_scope.server import create_app

app = create_app()

if __name__ == '__main__':
    print("🚀 Starting AI PR Review Scope Server...")
    print("📍 Server will be available at: http://localhost:8000")
    print("📋 API Documentation:")
    print("   - Health Check: GET /api/v1/health")
    print("   - Resolve Scope: POST /api/v1/reviews/scope")

    app.run(
        host='0.0.0.0',
        port=8000,
        debug=get_config().debug
    )
