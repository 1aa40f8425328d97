import logging
from functools import wraps
from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def handle_errors(f):
    """Error handling decorator for API endpoints"""
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ValueError as e:
            logger.warning(f"Invalid request: {e}")
            return jsonify({"success": False, "error": str(e)}), 400
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}", exc_info=True)
            return jsonify({"success": False, "error": "Course data is unavailable."}), 500
        except Exception as e:
            logger.error(f"Server error: {e}", exc_info=True)
            return jsonify({"success": False, "error": "Internal server error."}), 500
    return decorated
