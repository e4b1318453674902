import os

bind = os.getenv("GUNICORN_BIND", "unix:/var/www/submissions/backend/gunicorn.sock")
workers = int(os.getenv("GUNICORN_WORKERS", 4))
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
timeout = 60
keepalive = 5

wsgi_app = "core.wsgi:application"

# Logging
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("LOG_LEVEL", "info").lower()

proc_name = "submissions-backend"
daemon = False
