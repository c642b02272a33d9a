"""
Repository layer: data access objects over SQLAlchemy sessions.
"""
