#!/usr/bin/env python

"""
    Configurations for LendTrack

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import os


# Determine environment
TESTING = os.getenv("TESTING", "false").lower() == "true"

# API server configuration
SCHEME = 'http'
HOST = os.environ.get('LENDTRACK_HOST', 'localhost')
PORT = int(os.environ.get('LENDTRACK_PORT', 8080))
WORKERS = int(os.environ.get('LENDTRACK_WORKERS', 1))
DEBUG = bool(int(os.environ.get('LENDTRACK_DEBUG', 0)))
LOG_LEVEL = os.environ.get('LENDTRACK_LOG_LEVEL', 'info')
SSL_CRT = os.environ.get('LENDTRACK_SSL_CRT')
SSL_KEY = os.environ.get('LENDTRACK_SSL_KEY')
CORS_ORIGINS = [
    origin.strip() for origin in
    os.environ.get('LENDTRACK_CORS_ORIGINS', 'http://localhost:3000').split(',')
    if origin.strip()
]
LENDTRACK_HTTP_HEADERS = {"User-Agent": "LendTrackClient/1.0"}

# Demo gate: single static bearer token required for mutations
AUTH_TOKEN = os.environ.get('LENDTRACK_AUTH_TOKEN')

OPTIONS = {
    'host': HOST,
    'port': PORT,
    'log_level': LOG_LEVEL,
    'reload': DEBUG,
    'workers': WORKERS,
}
if SSL_CRT and SSL_KEY:
    OPTIONS['ssl_keyfile'] = SSL_KEY
    OPTIONS['ssl_certfile'] = SSL_CRT
    SCHEME = 'https'

API_URL = os.environ.get('LENDTRACK_API_URL', f"{SCHEME}://{HOST}:{PORT}/v1/api")

DB_CONFIG = {
    'user': os.environ.get('DB_USER', 'postgres'),
    'password': os.environ.get('DB_PASSWORD'),
    'host': os.environ.get('DB_HOST', 'localhost'),
    'port': int(os.environ.get('DB_PORT', '5432')),
    'dbname': os.environ.get('DB_NAME', 'lendtrack'),
}

# Database configuration
DB_URI = os.environ.get('DATABASE_URL') or (
    "sqlite:///:memory:" if TESTING else
    'postgresql+psycopg2://{user}:{password}@{host}:{port}/{dbname}'.format(**DB_CONFIG)
)

__all__ = [
    'SCHEME', 'HOST', 'PORT', 'DEBUG', 'LOG_LEVEL', 'OPTIONS', 'AUTH_TOKEN',
    'CORS_ORIGINS', 'API_URL', 'DB_URI', 'DB_CONFIG', 'TESTING'
]
