"""
Domain Package

Domain models and static configuration for the internet dependency graph.
"""
