"""
Service layer.

Each service encapsulates business logic for a domain and receives the
``Database`` handle explicitly, so API handlers never touch SQL.
"""
