"""
API module for the quiz system.
Provides the FastAPI-based REST API for the daily quote quiz.
"""

__all__ = ['app', 'routes', 'models', 'middleware']
