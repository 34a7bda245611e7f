"""
Daily Quote Quiz Test Suite
===========================

This package contains tests for the quiz system including:
- Unit tests for the stores, the quiz manager and utilities
- Integration tests for the HTTP API
"""
