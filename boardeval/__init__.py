from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from .extensions import db, login_manager, migrate, csrf, redis_store
from .errors import BoardEvalError


def create_app(config_object='config.Config'):
    """App factory.

    `config_object` is an import path or class, e.g. 'config.TestConfig'.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(app)
    migrate.init_app(app, db, directory="alembic")
    login_manager.init_app(app)
    csrf.init_app(app)
    redis_store.init_app(app)

    from . import models  # noqa: F401  registers tables on db.metadata

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Unauthorized", "message": "Login required"}), 401

    @app.errorhandler(BoardEvalError)
    def handle_board_error(err):
        if err.status_code >= 500:
            app.logger.exception('Unhandled board error')
        else:
            app.logger.info('%s: %s', err.__class__.__name__, err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"error": err.name.replace(" ", ""), "message": err.description}), err.code

    from .blueprints.auth import bp as auth_bp
    from .blueprints.vote import bp as vote_bp
    from .blueprints.results import bp as results_bp
    from .blueprints.settings import bp as settings_bp
    from .blueprints.cohorts import bp as cohorts_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(vote_bp, url_prefix="/vote")
    app.register_blueprint(results_bp, url_prefix="/results")
    app.register_blueprint(settings_bp, url_prefix="/settings")
    app.register_blueprint(cohorts_bp, url_prefix="/cohorts")

    @app.get('/')
    def index():
        from .services.cohorts import active_cohort
        cohort = active_cohort()
        return jsonify({"active_cohort": cohort.to_dict() if cohort else None})

    return app
