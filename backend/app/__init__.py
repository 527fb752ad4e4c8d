"""Application package for the student registry backend.

This package exposes the service, repository, mapper and model modules
used by the FastAPI application in `app.main`.
"""
