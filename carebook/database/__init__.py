"""
Database access: async engine, session factory and transaction helpers.
"""
