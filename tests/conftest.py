import pytest

from config import ApplicationConfig


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """bcrypt at cost 4 keeps the suite fast; hashing behaviour is unchanged"""
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)
