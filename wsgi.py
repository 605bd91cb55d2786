#!/usr/bin/env python3
"""
WSGI entry point for the TidyTask backend.
Point your WSGI server (uWSGI, gunicorn) at ``wsgi:application``.
"""

from app import create_app

# Create the Flask application instance
application = create_app()

if __name__ == "__main__":
    application.run()
