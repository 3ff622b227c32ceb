"""Gunicorn configuration for a small single-CPU host.

- 2 uvicorn workers so one can restart while the other serves
- max_requests recycles workers periodically
"""

import multiprocessing
import os

wsgi_app = "scoreline.api.main:app"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

workers = min(2, multiprocessing.cpu_count() + 1)
worker_class = "uvicorn.workers.UvicornWorker"

max_requests = 1000
max_requests_jitter = 50

# Settlement may wait on several upstream fetches
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
