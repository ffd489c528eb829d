"""
NIBOG Gateway - Payment & Booking Backend

A FastAPI-based service that builds and signs PhonePe payment requests,
verifies gateway callbacks, and fronts the booking webhook backend.
"""

__version__ = "0.1.0"
