# Core Module - Account Password Hashing
#
# Account password → PBKDF2-SHA256 hash (salted, iteration count stored
# alongside so it can be raised later without invalidating old hashes).
# Stored format: pbkdf2_sha256$<iterations>$<salt b64>$<hash b64>
#
# Only account passwords go through here. Vault entry secrets are stored
# as given.

import base64
import os
from typing import Tuple

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ALGORITHM = "pbkdf2_sha256"
MIN_PASSWORD_LENGTH = 8


class PasswordHasher:
    """
    Hashes and verifies account passwords.

    PBKDF2 parameters follow OWASP 2023 guidance for PBKDF2-SHA256.
    """

    PBKDF2_ITERATIONS = 600_000
    KEY_LENGTH = 32  # 256 bits
    SALT_LENGTH = 16

    @classmethod
    def _kdf(cls, salt: bytes, iterations: int) -> PBKDF2HMAC:
        return PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=cls.KEY_LENGTH,
            salt=salt,
            iterations=iterations,
        )

    @classmethod
    def hash(cls, password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Args:
            password: Plaintext account password

        Returns:
            Encoded hash string suitable for storage
        """
        salt = os.urandom(cls.SALT_LENGTH)
        iterations = cls.PBKDF2_ITERATIONS
        digest = cls._kdf(salt, iterations).derive(password.encode("utf-8"))
        return "$".join([
            ALGORITHM,
            str(iterations),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        ])

    @classmethod
    def verify(cls, password: str, encoded: str) -> bool:
        """
        Check a password against a stored hash (constant-time).

        Returns False for malformed hashes instead of raising.
        """
        try:
            algorithm, iterations, salt_b64, digest_b64 = encoded.split("$")
            if algorithm != ALGORITHM:
                return False
            salt = base64.b64decode(salt_b64)
            digest = base64.b64decode(digest_b64)
            kdf = cls._kdf(salt, int(iterations))
        except (ValueError, TypeError):
            return False

        try:
            kdf.verify(password.encode("utf-8"), digest)
        except InvalidKey:
            return False
        return True


def check_password_strength(password: str) -> Tuple[bool, str]:
    """
    Verify an account password meets the minimum requirements.

    Returns:
        (is_valid, error_message)
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"

    if password.strip() == "":
        return False, "Password must not be blank"

    return True, ""
