"""
Configuration

Environment-driven settings and client initialization for Redis, Google
Cloud Storage, Celery and logging.
"""
