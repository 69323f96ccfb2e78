"""
Gunicorn configuration for the tracker API.

Requests carry their own metric/log snapshot, so workers share nothing and
any of them can serve any request.

Env vars:
  PORT          : TCP port to bind (default: 8000)
  WORKERS       : worker processes (default: 2)
  TIMEOUT       : seconds before a silent worker is restarted (default: 60)
  LOG_LEVEL     : gunicorn's own log level, shared with the app (default: info)
"""
import os

wsgi_app = "tracker.main:app"
worker_class = "uvicorn.workers.UvicornWorker"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"
workers = int(os.environ.get("WORKERS", "2"))

# A 10k-log snapshot evaluates in well under a second.
timeout = int(os.environ.get("TIMEOUT", "60"))
graceful_timeout = 15
keepalive = 5

# Recycle workers after a few thousand requests.
max_requests = 5000
max_requests_jitter = 500

loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sus'
