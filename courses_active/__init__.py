from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from .config import Config
import logging.config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize logging
    logging.config.dictConfig(app.config['LOGGING'])

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    login_manager.login_view = 'auth.login'

    # Register blueprints
    from .routes.main import main_bp
    from .routes.auth import auth_bp
    from .routes.courses import courses_bp
    from .routes.api import api_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(courses_bp, url_prefix='/courses')
    app.register_blueprint(api_bp, url_prefix='/api')

    # Register CLI commands
    from .commands import init_db_command, seed_demo_command

    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_demo_command)

    # Create database tables
    with app.app_context():
        from .models import course, enrollment, completion, user  # noqa: F401
        db.create_all()

    return app
