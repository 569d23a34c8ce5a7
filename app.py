# app.py

from flask import Flask, g, request, jsonify
from config import get_config
from extensions import db, migrate
import os
import uuid
from werkzeug.middleware.proxy_fix import ProxyFix
from logging_config import setup_logging, get_logger

# Configure logging as early as possible
setup_logging(app_name="contact-form-api", log_level=os.environ.get('LOG_LEVEL', 'INFO'))
logger = get_logger(__name__)


def init_sentry():
    """Initialize Sentry error tracking in production."""
    sentry_dsn = os.environ.get('SENTRY_DSN')
    if sentry_dsn and os.environ.get('FLASK_ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(transaction_style='endpoint'),
                SqlalchemyIntegration()
            ],
            traces_sample_rate=0.1,
            environment=os.environ.get('FLASK_ENV', 'development'),
            release=os.environ.get('GIT_SHA', 'unknown')
        )
        logger.info("Sentry error tracking initialized")


init_sentry()


def create_app(config_name=None, test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__)

    config_class = get_config(config_name)
    app.config.from_object(config_class)

    config_class.init_app(app)

    if test_config:
        app.config.update(test_config)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so they are registered on db.metadata
    import contact_database  # noqa: F401

    app.services = create_registry()

    @app.before_request
    def before_request():
        g.request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
        logger.info("Request started",
                    request_id=g.request_id,
                    method=request.method,
                    path=request.path)

    @app.after_request
    def after_request(response):
        response.headers['X-Request-ID'] = getattr(g, 'request_id', '')
        logger.info("Request completed",
                    request_id=getattr(g, 'request_id', None),
                    status_code=response.status_code)
        return response

    @app.errorhandler(500)
    def internal_error(error):
        logger.error("Internal server error",
                     request_id=getattr(g, 'request_id', None),
                     error=str(error))
        return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(404)
    def not_found_error(error):
        logger.warning("Page not found",
                       request_id=getattr(g, 'request_id', None),
                       path=request.path)
        return jsonify({'error': 'Not found'}), 404

    @app.route('/health')
    def health_check():
        """Health check endpoint for monitoring"""
        from sqlalchemy import text
        health_status = {
            'status': 'healthy',
            'service': 'contact-form-api'
        }

        try:
            db.session.execute(text('SELECT 1'))
            health_status['database'] = 'connected'
        except Exception as e:
            health_status['database'] = 'error'
            health_status['status'] = 'degraded'
            logger.error(f"Health check database error: {e}")

        return jsonify(health_status), 200 if health_status['status'] == 'healthy' else 503

    from routes.contact_routes import contact_bp
    app.register_blueprint(contact_bp, url_prefix='/api/contacts')

    # Register CLI commands
    from scripts import commands
    commands.init_app(app)

    return app


def create_registry():
    """Wire the session, repository and service into a ServiceRegistry."""
    from services.registry import ServiceRegistry
    registry = ServiceRegistry()

    # db.session is a scoped proxy; resolve it per request
    registry.register_factory('db_session', lambda: db.session, scoped=True)
    registry.register_factory(
        'contact_repository',
        _create_contact_repository,
        dependencies=['db_session'],
        scoped=True
    )
    registry.register_factory(
        'contact',
        _create_contact_service,
        dependencies=['contact_repository'],
        scoped=True
    )
    return registry


# Service Factory Functions

def _create_contact_repository(db_session):
    """Create ContactRepository instance"""
    from repositories.contact_repository import ContactRepository
    return ContactRepository(session=db_session)


def _create_contact_service(contact_repository):
    """Create ContactService instance"""
    from services.contact_service import ContactService
    return ContactService(contact_repository=contact_repository)
