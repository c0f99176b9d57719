"""
Password hashing.

Standard path: salted, iterated bcrypt hashes.
Bootstrap path: unsalted single-pass SHA-256 hex, used only by the one-time
administrative bootstrap script. It is weaker than the standard path and is
accepted at login only so the bootstrapped admin can sign in and rotate it.
"""

import hashlib
import hmac
import logging

import bcrypt

from config import ApplicationConfig

logger = logging.getLogger(__name__)

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured cost factor"""
    return bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
    ).decode("utf-8")


def hash_password_bootstrap(password: str) -> str:
    """WEAKER than hash_password: unsalted SHA-256, bootstrap only"""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def is_bootstrap_hash(password_hash: str) -> bool:
    return not password_hash.startswith(_BCRYPT_PREFIXES)


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a stored bcrypt or bootstrap hash"""
    if not password_hash:
        return False

    if is_bootstrap_hash(password_hash):
        logger.warning("Verifying a bootstrap (unsalted) password hash")
        candidate = hash_password_bootstrap(password)
        return hmac.compare_digest(candidate, password_hash)

    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def burn_password_check() -> None:
    """Spend one bcrypt round trip so unknown users cost the same as known ones"""
    bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS))
