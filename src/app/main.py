from flask import Flask, jsonify

from app.backtests import bp as backtests_bp
from app.config import BACKTEST_DEBUG, BACKTEST_HOST, BACKTEST_PORT


def create_app() -> Flask:
    app = Flask(__name__)
    app.register_blueprint(backtests_bp)

    @app.errorhandler(405)
    def method_not_allowed(_err):
        return jsonify({"error": "Method not allowed"}), 405

    return app


app = create_app()

if __name__ == "__main__":
    app.run(host=BACKTEST_HOST, port=BACKTEST_PORT, debug=BACKTEST_DEBUG)
