import pytest

from config import ApplicationConfig


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Cheapest bcrypt cost so hashing does not dominate the suite"""
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)
