"""Database models."""
from portal.models.db.mock_test import MockQuestion, MockTest
from portal.models.db.attempt import Attempt

__all__ = [
    "MockTest",
    "MockQuestion",
    "Attempt",
]
