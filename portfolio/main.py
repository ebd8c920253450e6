"""
gunicorn entrypoint: ``gunicorn -c gunicorn.conf.py portfolio.main:app``

Building the app here means a missing DATABASE_URL or an unreachable
database stops the worker from booting.
"""
from portfolio.factory import create_app

app = create_app()
