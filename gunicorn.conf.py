# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

# Each worker process builds its own in-memory corpus at startup
wsgi_app = "app:create_app()"

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info').lower()

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# One corpus copy per process; concurrent reads are served by threads
cores = multiprocessing.cpu_count()
workers = int(os.getenv('WEB_CONCURRENCY', min(cores, 2)))
threads = 8


def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers x {threads} threads on port {port}")


timeout = 60
keepalive = 5
worker_class = "gthread"

# Process naming
proc_name = "douay_rheims"
default_proc_name = "douay_rheims"

# Graceful server restart
graceful_timeout = 30
