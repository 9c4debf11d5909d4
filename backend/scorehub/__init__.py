from flask import Flask, current_app, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()

DEFAULT_ACHIEVEMENTS = [
    {'id': 'first_login', 'name': 'Welcome', 'description': 'Log in for the first time', 'points': 10},
    {'id': 'score_100', 'name': 'Centurion', 'description': 'Reach a score of 100', 'points': 25},
    {'id': 'score_1000', 'name': 'High Roller', 'description': 'Reach a score of 1000', 'points': 100},
]


def get_accounts():
    """Return the AccountService bound to the current app."""
    return current_app.extensions['accounts']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', []))

    from scorehub.errors import InternalError, ServiceError, Unauthorized
    from scorehub.services import AccountService, TokenIssuer

    tokens = TokenIssuer(
        flask_app.config.get('JWT_SECRET'),
        expires_in=flask_app.config.get('JWT_EXPIRES_SEC', 3600),
    )
    accounts = AccountService(
        db.session,
        bcrypt,
        tokens,
        logger=flask_app.logger,
    )
    flask_app.extensions['accounts'] = accounts

    # Import and register blueprints here
    from scorehub.main import main
    flask_app.register_blueprint(main)

    from scorehub.api.players import players
    flask_app.register_blueprint(players)

    @flask_app.errorhandler(ServiceError)
    def handle_service_error(exc):
        return jsonify({'error': exc.message}), exc.status_code

    @flask_app.errorhandler(SQLAlchemyError)
    def handle_store_error(exc):
        db.session.rollback()
        flask_app.logger.exception(f"[store-error] {exc.__class__.__name__}")
        return handle_service_error(InternalError())

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        db.session.rollback()
        flask_app.logger.exception(f"[unhandled] {exc.__class__.__name__}")
        return handle_service_error(InternalError())

    # Bearer tokens instead of session cookies
    @login_manager.request_loader
    def load_user_from_request(req):
        scheme, _, token = req.headers.get('Authorization', '').partition(' ')
        if scheme.lower() != 'bearer' or not token.strip():
            return None
        try:
            return accounts.user_for_token(token.strip())
        except Unauthorized as exc:
            flask_app.logger.info(f"[token-rejected] {exc.message}")
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Not authenticated'}), 401

    with flask_app.app_context():
        from scorehub import models  # noqa: F401
        db.create_all()
        flask_app.logger.info(f"[startup] connected to {db.engine.url!r}")

    @click.command('init-db')
    def init_db_command():
        """Creates any missing tables."""
        with flask_app.app_context():
            db.create_all()
        click.echo('Database tables are in place.')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the achievement catalog."""
        from scorehub.models import Achievement
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            for entry in DEFAULT_ACHIEVEMENTS:
                db.session.add(Achievement(**entry))

            db.session.commit()
            click.echo('Database has been reset and seeded!')

    @click.command('add-achievement')
    @click.argument('achievement_id')
    @click.argument('name')
    @click.argument('description')
    @click.argument('points', type=int)
    def add_achievement_command(achievement_id, name, description, points):
        """Adds or replaces one entry in the achievement catalog."""
        from scorehub.models import Achievement
        with flask_app.app_context():
            db.session.merge(Achievement(id=achievement_id, name=name, description=description, points=points))
            db.session.commit()
        click.echo(f'Achievement {achievement_id} saved.')

    flask_app.cli.add_command(init_db_command)
    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(add_achievement_command)

    return flask_app
