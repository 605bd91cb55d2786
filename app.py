from flask import Flask, jsonify, send_from_directory
from werkzeug.exceptions import HTTPException
from config import get_config
from errors import ApiError
from extensions import db, migrate, bcrypt, mail, cors
import logging
from logging.handlers import RotatingFileHandler
import os
import sys

basedir = os.path.abspath(os.path.dirname(__file__))


def create_app(config_name=None):
    app = Flask(__name__)

    # Get configuration based on environment or passed parameter
    if config_name:
        from config import config
        config_class = config[config_name]
    else:
        config_class = get_config()
    app.config.from_object(config_class)

    # Refuse to start without a signing secret or a database
    config_class.validate(app.config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=os.path.join(basedir, 'migrations'), render_as_batch=True)
    bcrypt.init_app(app)
    mail.init_app(app)
    cors.init_app(
        app,
        origins=app.config['CORS_ORIGINS'],
        supports_credentials=True,
        methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
        allow_headers=['Content-Type', 'Authorization', 'X-Requested-With'],
    )

    # Import models to register them with SQLAlchemy
    from models import User, Task  # noqa: F401

    configure_logging(app)

    # Register blueprints
    from routes.auth import auth_bp
    from routes.users import users_bp
    from routes.tasks import tasks_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(users_bp, url_prefix='/users')
    app.register_blueprint(tasks_bp, url_prefix='/tasks')

    @app.route('/')
    def index():
        return jsonify({'message': 'Task Manager Backend is running...'})

    @app.route('/health')
    def health_check():
        return jsonify({'status': 'healthy'})

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

    register_error_handlers(app)

    return app


def configure_logging(app):
    if app.debug or app.testing:
        return

    if app.config['LOG_TO_STDOUT']:
        handler = logging.StreamHandler(sys.stdout)
    else:
        if not os.path.exists('logs'):
            os.mkdir('logs')
        handler = RotatingFileHandler('logs/tidytask.log', maxBytes=10240, backupCount=10)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
    handler.setLevel(app.config['LOG_LEVEL'])
    app.logger.addHandler(handler)
    app.logger.setLevel(app.config['LOG_LEVEL'])
    app.logger.info('TidyTask backend startup')


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        db.session.rollback()
        app.logger.exception(f'Unhandled error: {error}')
        return jsonify({'success': False, 'message': 'Error interno del servidor'}), 500
