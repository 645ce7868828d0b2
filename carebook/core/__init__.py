"""
Core components: domain base classes, container, logging and app lifecycle.
"""
