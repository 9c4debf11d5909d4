import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///scorehub.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Bearer tokens (HS256); no built-in default, the app refuses to start without one
    JWT_SECRET = os.environ.get('JWT_SECRET') or os.environ.get('SECRET_KEY')
    JWT_EXPIRES_SEC = int(os.environ.get('JWT_EXPIRES_SEC', '3600'))
    # bcrypt cost factor
    BCRYPT_LOG_ROUNDS = int(os.environ.get('BCRYPT_LOG_ROUNDS', '10'))
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173').split(',')
        if origin.strip()
    ]
    PORT = int(os.environ.get('PORT', '3000'))
