"""
Gunicorn configuration for the listings API
Run with: gunicorn -c gunicorn.conf.py estate.main:app
"""
import os

# Server socket
bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '8000')}"
backlog = 1024

# Worker processes
# Each worker owns its own MongoDB connection pool
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"

# Worker lifecycle
max_requests = 1000
max_requests_jitter = 100

# Timeouts
timeout = 30
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "estate_api"

daemon = False

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(D)s'


def on_starting(server):
    server.log.info("Starting listings API")


def when_ready(server):
    server.log.info("Listings API ready, spawning %s workers", workers)


def worker_abort(worker):
    worker.log.info("Worker %s aborted", worker.pid)
