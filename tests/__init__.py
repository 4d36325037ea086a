"""
Test suite for EduAppoint.

Contains unit tests for the authorization policy and API tests for the
user, appointment and messaging endpoints.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
