"""
EduAppoint

A FastAPI-based service where students book appointments with teachers,
users exchange direct messages, and administrators approve and moderate
accounts and appointments.
"""

__version__ = "1.0.0"
