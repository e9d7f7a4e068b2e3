"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: the relational store behind the
dashboard, reached through a SQLAlchemy engine.
"""
