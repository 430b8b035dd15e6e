"""
Gunicorn Configuration

Uvicorn workers under Gunicorn for the warehouse API.

    gunicorn cinedash.main:app -c gunicorn.conf.py
"""

import multiprocessing
import os

bind = os.getenv("BIND", f"0.0.0.0:{os.getenv('PORT', '8000')}")
backlog = 2048

# The API is I/O bound on the warehouse; 2n+1 workers
workers = int(os.getenv("WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 10000
max_requests_jitter = 1000
timeout = int(os.getenv("WORKER_TIMEOUT", 120))
keepalive = 5
graceful_timeout = 30

proc_name = "cinedash-api"
daemon = False

errorlog = "-"
accesslog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(D)sus'


def when_ready(server):
    server.log.info("cinedash-api ready on %s with %s workers", bind, workers)


def worker_abort(worker):
    worker.log.warning("Worker %s aborted (timeout %ss)", worker.pid, timeout)
