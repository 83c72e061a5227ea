"""Input format checks shared by the use cases"""

import re

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
SUBDOMAIN_MIN_LENGTH = 3
SUBDOMAIN_MAX_LENGTH = 63
PASSWORD_MIN_LENGTH = 8


def is_valid_subdomain(subdomain: str) -> bool:
    if not SUBDOMAIN_MIN_LENGTH <= len(subdomain) <= SUBDOMAIN_MAX_LENGTH:
        return False
    return SUBDOMAIN_PATTERN.match(subdomain) is not None


def is_valid_password(password: str) -> bool:
    return password is not None and len(password) >= PASSWORD_MIN_LENGTH


def is_blank(value) -> bool:
    return value is None or not str(value).strip()
