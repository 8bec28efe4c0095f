import os


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-in-production')

    # Local key-value store backing the two persisted slots
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///khelbharat.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ATHLETE_STORAGE_KEY = os.getenv('ATHLETE_STORAGE_KEY', 'khelbharatAthletes')
    THEME_STORAGE_KEY = os.getenv('THEME_STORAGE_KEY', 'khelbharatTheme')

    # Avatars are stored inline as data URIs, keep uploads small
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False
    SECRET_KEY = os.getenv('SECRET_KEY')
    LOG_FILE = os.getenv('LOG_FILE', 'logs/khelbharat.log')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    LOG_FILE = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
