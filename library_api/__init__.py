"""
Library API Application Package

A small CRUD API over books, authors and genres.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- exceptions.py: Application error hierarchy mapped to HTTP status codes
- main.py: FastAPI application factory, exception handlers, router wiring
- dependencies.py: Dependency injection functions (sessions, services)
- models/: SQLAlchemy ORM models
- repositories/: Per-entity data access (find/create/update/delete)
- schemas/: Pydantic request/response schemas and the response envelope
- routers/: API route handlers
- services/: Business logic (book, author, genre services, rate limiting)
"""

__version__ = "0.1.0"
