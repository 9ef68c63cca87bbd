"""
Backend package for the scrapbook notes service.

This package provides a FastAPI application in front of a notes store that
can persist to a hosted table, a SQL database, Redis, a local JSON file or
process memory, whichever of those the deployment has configured.
"""
