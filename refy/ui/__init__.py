"""
UI package for the Referee Sideline Assistant.

This package contains the Flask web server exposing the match engine.
"""
from .web_app import create_app, run_web_app, WebAppState

__all__ = ["create_app", "run_web_app", "WebAppState"]
