"""Infrastructure: in-memory catalog, SQLAlchemy persistence and password hashing"""
