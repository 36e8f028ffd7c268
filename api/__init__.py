"""
REST API for the relational algebra engine.
"""
