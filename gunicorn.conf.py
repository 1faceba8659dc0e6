# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info')

wsgi_app = "app:create_app()"

port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Scripture lookups are I/O bound; threads share each worker's cache
cores = multiprocessing.cpu_count()
workers = int(os.getenv('WEB_CONCURRENCY', min(cores * 2 + 1, 4)))
threads = 4


def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers x {threads} threads on port {port}")


timeout = 60
keepalive = 5
worker_class = "gthread"

proc_name = "bible_nav"

graceful_timeout = 30
