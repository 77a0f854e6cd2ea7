"""
models/ - Domain Models
========================
Plain dataclasses and enums for subscriptions and derived reminders.
No I/O happens here.
"""
