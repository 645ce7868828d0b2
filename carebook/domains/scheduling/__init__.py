"""
Scheduling Domain

Slot allocation and appointment booking for clinicians and patients.
"""
