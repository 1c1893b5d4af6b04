"""
Lake Reservations - fishing-spot reservation service
Flask application factory and initialization
"""

import os
import logging

import click
from flask import Flask, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager

# Import database functions
from database import close_db, init_db, run_all_migrations


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    config_class = config[config_name]
    app.config.from_object(config_class)
    if hasattr(config_class, 'validate'):
        config_class.validate()

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.reservations import reservations_bp
    from blueprints.spots import spots_bp
    from blueprints.api.routes import api_bp

    # Register blueprints
    app.register_blueprint(reservations_bp)
    app.register_blueprint(spots_bp)
    app.register_blueprint(api_bp, url_prefix='/api')


def register_error_handlers(app):
    """Register error handlers."""
    from utils.api_response import api_error, service_error
    from utils.errors import ReservationServiceError
    from utils.messages import get_message

    @app.errorhandler(ReservationServiceError)
    def service_failure(error):
        """Engine errors escaping a route."""
        return service_error(error, 'operation_failed')

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(get_message('not_found'), status=404)

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors."""
        return api_error(get_message('method_not_allowed'), status=405)

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        app.logger.error('Unhandled error: %s', error)
        return api_error(get_message('operation_failed'), status=500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    @click.option('--no-seed', is_flag=True, help='Skip the demo lake.')
    def init_db_command(no_seed):
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db(seed=not no_seed)
        click.echo('Database initialized successfully!')

    @app.cli.command('migrate')
    def migrate_command():
        """Upgrade stored lake documents to the current shape."""
        with app.app_context():
            run_all_migrations()
        click.echo('Migrations finished.')

    @app.cli.command('create-lake')
    @click.argument('name')
    @click.option('--spots', default=0, show_default=True, help='Number of spots to generate.')
    def create_lake_command(name, spots):
        """Create a new lake with generated spots."""
        from models.lake import create_lake
        from utils.errors import ReservationServiceError

        with app.app_context():
            try:
                lake = create_lake(name, spots)
                click.echo(f'Lake {lake["name"]} created with {len(lake["spots"])} spots.')
            except ReservationServiceError as e:
                click.echo(f'Error creating lake: {e.message}', err=True)

    @app.cli.command('backup-lakes')
    def backup_lakes_command():
        """Write a JSON snapshot of every lake to BACKUP_DIR."""
        from models.lake import backup_lakes

        with app.app_context():
            if backup_lakes():
                click.echo(f'Snapshot written to {app.config["BACKUP_DIR"]}')
            else:
                click.echo('Snapshot failed, see log.', err=True)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/lake_reservations.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        logging.getLogger().addHandler(file_handler)
        logging.getLogger().setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Lake Reservations startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
