"""
Scheduling Application Layer

Ports, DTOs, services and use cases.
"""
