'''Assembles the Flask app: config, blueprints, error handlers. Does not start a server;
run.py, a WSGI server or the test suite call create_app().'''
# unitturn/app_factory.py
from flask import Flask, jsonify
import os
from dotenv import load_dotenv

from unitturn.schemas.api_result import ApiResult
from unitturn.schemas.error_type import ErrorType

# load .env
load_dotenv()

# project root (absolute)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def create_app(config=None):
    """Application factory. `config` overrides env-derived settings (tests pass DATABASE_URL / TESTING)."""
    app = Flask(__name__)

    db_path = os.path.join(BASE_DIR, 'unit_turns.db')
    default_db_url = f"sqlite:///{db_path}"
    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL', default_db_url)

    if config:
        app.config.update(config)

    # db/session.py reads the URL from the environment
    os.environ['DATABASE_URL'] = app.config['DATABASE_URL']

    from unitturn.routes.template import template_bp
    from unitturn.routes.cost_code import cost_code_bp
    from unitturn.routes.unit_turn import unit_turn_bp

    app.register_blueprint(template_bp)
    app.register_blueprint(cost_code_bp)
    app.register_blueprint(unit_turn_bp)

    register_error_handlers(app)

    return app


def register_error_handlers(app):
    """JSON envelopes for errors raised outside the views"""
    @app.errorhandler(404)
    def not_found(error):
        result = ApiResult.failure(ErrorType.NOT_FOUND, "Resource not found")
        return jsonify(result.model_dump(mode="json")), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        result = ApiResult.failure(ErrorType.INPUT_ERROR, "Method not allowed")
        return jsonify(result.model_dump(mode="json")), 405

    @app.errorhandler(500)
    def internal_error(error):
        result = ApiResult.failure(ErrorType.SYSTEM_ERROR, "Internal server error")
        return jsonify(result.model_dump(mode="json")), 500
