#!/usr/bin/env python3
"""
Main entry point for the REFY Sideline Assistant web application.

This script launches the Flask-based web server. Match data is kept in a
JSON file (``REFY_DATA_FILE``, default ``refy_data.json``).
"""
import os

from refy.services import JsonFileStore
from refy.ui.web_app import run_web_app
from refy.utils import configure_logging

if __name__ == "__main__":
    configure_logging(extra_loggers=["werkzeug"])
    project_root = os.path.dirname(os.path.abspath(__file__))
    data_file = os.getenv("REFY_DATA_FILE", os.path.join(project_root, "refy_data.json"))
    run_web_app(
        host=os.getenv("REFY_HOST", "127.0.0.1"),
        port=int(os.getenv("REFY_PORT", "7122")),
        static_folder=project_root,
        store=JsonFileStore(data_file),
    )
