import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()

class Config:
    # Flask Configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///courses_active.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Debug Configuration
    DEBUG = os.getenv('FLASK_ENV') == 'development'

    # Site Configuration
    SITE_COURSE_ID = int(os.getenv('SITE_COURSE_ID', '1'))
    DEFAULT_LANG = os.getenv('DEFAULT_LANG', 'en')

    # Active courses block
    ACTIVE_COURSES_SORT = os.getenv('ACTIVE_COURSES_SORT', 'visible DESC, fullname ASC')
    ACTIVE_COURSES_LIMIT = int(os.getenv('ACTIVE_COURSES_LIMIT', '0'))

    # Logging Configuration
    LOGGING = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'standard'
            }
        },
        'root': {
            'level': os.getenv('LOG_LEVEL', 'INFO'),
            'handlers': ['console']
        }
    }

    # Session Configuration
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SITE_COURSE_ID = 1
    ACTIVE_COURSES_SORT = 'visible DESC, fullname ASC'
    ACTIVE_COURSES_LIMIT = 0
