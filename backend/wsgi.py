# backend/wsgi.py
from propdesk import create_app

app = create_app()
