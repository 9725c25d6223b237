"""Passcode gate for protected volumes.

Passcodes are kept as Argon2id hashes; the clear text only lives for the
duration of a create or mount call.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from localvol.driver.errors import AccessDeniedError
from localvol.driver.options import VolumeOptions


class AccessGate:
    """Validates and compares volume passcodes."""

    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self._hasher = hasher or PasswordHasher()

    def protect(self, opts: VolumeOptions) -> str | None:
        """Hash the passcode supplied at create time.

        Returns None for an open volume (no passcode, or an empty one).
        Raises InvalidOptionsError if the passcode is not a string.
        """
        passcode = opts.passcode()
        if not passcode:
            return None
        return self._hasher.hash(passcode)

    def check(self, name: str, passcode_hash: str | None, opts: VolumeOptions) -> None:
        """Permit or refuse a mount of volume ``name``.

        Raises:
            AccessDeniedError: passcode missing or wrong.
            InvalidOptionsError: passcode supplied but not a string.
        """
        if passcode_hash is None:
            return

        if not opts.has_passcode():
            raise AccessDeniedError(f"Volume {name} requires a passcode")

        passcode = opts.passcode()
        try:
            self._hasher.verify(passcode_hash, passcode)
        except (VerificationError, InvalidHashError):
            raise AccessDeniedError(f"Volume {name} access denied") from None
