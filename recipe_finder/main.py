"""Flask application entry point."""

import logging
from flask import Flask, jsonify
from flask_cors import CORS

from .config import settings
from .db import init_db
from .exceptions import (
    AuthenticationError,
    Forbidden,
    RecipeFinderError,
    ResourceNotFound,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__)
app.secret_key = settings.secret_key
app.config["SESSION_COOKIE_NAME"] = settings.session_cookie_name
app.config["SESSION_COOKIE_HTTPONLY"] = True

# CORS configuration (credentials needed for the session cookie)
CORS(app, origins=settings.cors_origins, supports_credentials=True)


# Database initialization (runs once on app startup)
def initialize_database():
    """Initialize database on app startup."""
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


with app.app_context():
    initialize_database()


# Error handlers
def _error_response(error: RecipeFinderError, error_type: str, status: int):
    response = {
        "error": {
            "type": error_type,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), status


@app.errorhandler(ValidationError)
def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _error_response(error, "ValidationError", 400)


@app.errorhandler(AuthenticationError)
def handle_authentication_error(error):
    """Handle AuthenticationError exceptions."""
    return _error_response(error, "AuthenticationError", 401)


@app.errorhandler(Forbidden)
def handle_forbidden(error):
    """Handle Forbidden exceptions."""
    return _error_response(error, "Forbidden", 403)


@app.errorhandler(ResourceNotFound)
def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error, "ResourceNotFound", 404)


@app.errorhandler(RecipeFinderError)
def handle_recipe_finder_error(error):
    """Handle generic RecipeFinderError exceptions."""
    logger.error(f"{error.__class__.__name__}: {error.message}")
    return _error_response(error, error.__class__.__name__, 500)


@app.errorhandler(500)
def handle_internal_error(error):
    """Handle internal server errors."""
    original = getattr(error, "original_exception", None) or error
    logger.error(f"Internal error: {original}", exc_info=original)
    return jsonify({
        "error": {
            "type": "InternalServerError",
            "message": "An internal error occurred"
        }
    }), 500


# Health check endpoint
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# Register blueprints
from .auth.api import auth_bp
from .shell import shell_bp

app.register_blueprint(auth_bp)
app.register_blueprint(shell_bp)


if __name__ == "__main__":
    app.run(debug=True)
