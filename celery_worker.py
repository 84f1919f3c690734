import os
from app.celery_app import celery_app

"""
Starts the Celery worker that runs the maintenance tasks.

Usage:
    - python celery_worker.py
    - or: celery -A celery_worker.celery_app worker --loglevel=info
"""

if __name__ == '__main__':
    os.system('celery -A celery_worker.celery_app worker --loglevel=info --concurrency=1 --queues=default')
