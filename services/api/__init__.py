"""
Backend API Service - FastAPI Application

Responsibilities:
- Expose CRUD endpoints over the users table for frontend consumption
- Translate each request into a single parameterized SQL statement shape
- Answer CORS preflight requests and label every response as JSON
- Optionally trace database calls (DEBUG=true)

Endpoints (under API_PREFIX, default /api/go):
- GET /users - List users
- GET /users/{id} - Get user by ID
- POST /users - Create user
- PUT /users/{id} - Overwrite user name and email
- DELETE /users/{id} - Delete user
"""

from services.api.app import create_app

__all__ = ["create_app"]
