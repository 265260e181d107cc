"""Flask entrypoint for the channel suggestions service."""

from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from web.config import AppConfig
from web.routes.api import api_bp



def create_app() -> Flask:
    app = Flask(__name__)

    config = AppConfig.from_env()
    app.config.update(config.to_flask_config())

    app.register_blueprint(api_bp)

    @app.errorhandler(404)
    def not_found(error):  # pylint: disable=unused-argument
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):  # pylint: disable=unused-argument
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):  # pylint: disable=unused-argument
        return jsonify({"error": "Internal server error"}), 500

    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)
    return app


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080, debug=app.config.get("APP_ENV") != "production")
