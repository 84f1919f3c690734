import os
from app.celery_app import celery_app

"""
Starts the Celery beat scheduler (schedule is defined in app.celery_app).

Usage:
    - python celery_beat.py
    - or: celery -A celery_beat.celery_app beat --loglevel=info
"""

if __name__ == '__main__':
    os.system('celery -A celery_beat.celery_app beat --loglevel=info')
