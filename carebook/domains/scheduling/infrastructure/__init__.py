"""
Scheduling Domain Infrastructure

Persistence and notification adapters.
"""
