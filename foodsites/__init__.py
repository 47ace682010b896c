"""
Backend package for the food-donation site directory.

This package provides a FastAPI application serving the sites directory,
map data and the partner/contact form endpoints, with store and mailer
abstractions so it can run against Supabase, any SQLAlchemy database, or
in-memory backends for development.
"""
