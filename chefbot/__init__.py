import logging
import random

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import Config
from .errors import ServiceError
from .extensions import db, jwt, migrate

logger = logging.getLogger(__name__)


def register_error_handlers(app):

    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        return jsonify({"message": e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        logger.exception("[ChefBot] Unhandled error: %s", e)
        return jsonify({"message": "Server error"}), 500

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"message": "Not authorized, no token"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"message": "Not authorized, token failed"}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"message": "Not authorized, token expired"}), 401


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    register_error_handlers(app)

    # One generator per app so a configured seed makes replies reproducible
    app.extensions["chatbot_rng"] = random.Random(app.config["CHATBOT_RANDOM_SEED"])

    with app.app_context():
        from chefbot import models  # noqa: F401
        db.create_all()

    from chefbot.controller.chatbot_controller import chatbot_bp
    app.register_blueprint(chatbot_bp)

    from chefbot.controller.order_controller import order_bp
    app.register_blueprint(order_bp)

    from chefbot.controller.calorie_tracker_controller import calorie_tracker_bp
    app.register_blueprint(calorie_tracker_bp)

    from chefbot.controller.expense_tracker_controller import expense_tracker_bp
    app.register_blueprint(expense_tracker_bp)

    from chefbot.controller.user_profile_controller import user_profile_bp
    app.register_blueprint(user_profile_bp)

    from chefbot.controller.food_controller import food_bp
    app.register_blueprint(food_bp)

    from chefbot.controller.cart_controller import cart_bp
    app.register_blueprint(cart_bp)

    return app
