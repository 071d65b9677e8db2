"""
Tests Package - Unit Tests

Test structure:
- tests/unit/ - Fast, isolated unit tests against a temporary SQLite database
- tests/conftest.py - Shared pytest fixtures (settings, engine, client)
"""
