"""
Infrastructure adapters for the dashboard bounded context.

Each adapter implements a domain port (ABC) and talks to the
relational store through plain SQL on a SQLAlchemy engine.
"""
