import os


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-prod')
    
    # Database
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///padelscore.db')
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Server
    PORT = int(os.getenv('PORT', '3001'))
    FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:5000')
    
    # Bearer tokens issued by /api/auth/login
    TOKEN_MAX_AGE = int(os.getenv('TOKEN_MAX_AGE', '86400'))
    
    # Live score streams
    LIVE_KEEPALIVE_SECONDS = int(os.getenv('LIVE_KEEPALIVE_SECONDS', '30'))
    LIVE_QUEUE_SIZE = int(os.getenv('LIVE_QUEUE_SIZE', '100'))
    
    # Include exception text in 500 responses
    EXPOSE_ERRORS = False


class DevelopmentConfig(Config):
    DEBUG = True
    EXPOSE_ERRORS = True


class ProductionConfig(Config):
    DEBUG = False
    EXPOSE_ERRORS = False


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    EXPOSE_ERRORS = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    LIVE_KEEPALIVE_SECONDS = 1


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
