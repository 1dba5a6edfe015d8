"""Jobly API: companies and jobs over PostgreSQL."""

__version__ = "0.1.0"
