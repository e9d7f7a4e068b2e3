"""
Application layer for the dashboard bounded context.

Use cases coordinate domain entities and ports to fulfill operator and
client actions. Storage failures are caught here and reported as falsy
results; domain errors propagate to the interface layer.
"""
