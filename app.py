from flask import Flask, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import Settings
from errors import ApiError, Unauthenticated, UpstreamError
from extensions import db, migrate, login_manager, oauth

GOOGLE_METADATA_URL = "https://accounts.google.com/.well-known/openid-configuration"


def create_app(settings=None):
    settings = settings or Settings.from_env()

    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.secret_key
    app.config['SQLALCHEMY_DATABASE_URI'] = settings.database_url
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['TESTING'] = settings.testing
    app.json.sort_keys = False
    app.extensions["settings"] = settings

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    oauth.init_app(app)
    oauth.register(
        name="google",
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        server_metadata_url=GOOGLE_METADATA_URL,
        client_kwargs={"scope": "openid email profile"},
    )

    # Import models after db init
    from models import User
    from services import auth as auth_service

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(req):
        header = req.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return None
        return auth_service.load_token(
            header[len("Bearer "):].strip(), settings.secret_key, settings.token_max_age
        )

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthenticated()

    register_error_handlers(app)

    # Import blueprints
    from blueprints.auth.routes import auth_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")

    from blueprints.bookings.routes import bookings_bp
    app.register_blueprint(bookings_bp, url_prefix="/bookings")

    from blueprints.destinations.routes import destinations_bp
    app.register_blueprint(destinations_bp, url_prefix="/destinations")

    from blueprints.guides.routes import guides_bp
    app.register_blueprint(guides_bp, url_prefix="/guides")

    from blueprints.notifications.routes import notifications_bp
    app.register_blueprint(notifications_bp, url_prefix="/notifications")

    from blueprints.reviews.routes import reviews_bp
    app.register_blueprint(reviews_bp, url_prefix="/reviews")

    from blueprints.search.routes import search_bp
    app.register_blueprint(search_bp, url_prefix="/search")

    from blueprints.dashboard.routes import dashboard_bp
    app.register_blueprint(dashboard_bp, url_prefix="/dashboard")

    @app.route("/")
    def home():
        return jsonify({"name": "Trekking marketplace API", "status": "ok"})

    @app.route("/config/map")
    def map_config():
        return jsonify(settings.map_config)

    @app.route("/config/analytics")
    def analytics_config():
        return jsonify({"measurementId": settings.ga_measurement_id or None})

    return app


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(err):
        if isinstance(err, UpstreamError):
            # provider detail stays in the log
            app.logger.error("%s %s failed: %s", request.method, request.path, err.message)
            return jsonify({"error": UpstreamError.message}), err.status_code
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(err):
        db.session.rollback()
        app.logger.exception("Database error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"error": err.description}), err.code


if __name__ == "__main__":
    create_app().run(debug=True)
