# config.py
import os


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev_secret_key'
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Optional: Socket.IO message queue for multi-instance deployments
    REDIS_URL = os.environ.get('REDIS_URL')

    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '5000'))
    DEBUG = os.environ.get('DEBUG', '0') == '1'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '6'))


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
