"""Application package for the teacher registry backend.

This package exposes the service, repository and model modules used by
the FastAPI application. Report renderers live under `utils`; individual
modules contain the concrete implementations and documentation.
"""
