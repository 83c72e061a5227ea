"""Password hashing with bcrypt"""

import bcrypt

from config import ApplicationConfig

# Used when the user does not exist so the response time does not reveal it
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(4))


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
    )
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def burn_password_check(password: str) -> None:
    """Spend a bcrypt comparison without a real hash (unknown-user login path)"""
    bcrypt.checkpw(password.encode("utf-8"), _DUMMY_HASH)
