from __future__ import annotations

import base64
import hashlib
import json
import logging
import time

from cryptography.fernet import Fernet, InvalidToken
from itsdangerous import BadData, URLSafeTimedSerializer
from itsdangerous.encoding import base64_decode, base64_encode

from cookie_session.errors import SealError, UnsealError

logger = logging.getLogger(__name__)

# Browsers cap a single cookie at roughly 4KB.
DEFAULT_MAX_LENGTH = 4096

ENCRYPT_KEY_LENGTH = 32


def _as_bytes(key: str | bytes) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else key


def _canonical_signature(token: str) -> bool:
    # Decoding ignores the spare low bits of the last base64 character;
    # only the exact signature we issued is accepted.
    sig = token.rsplit(".", 1)[-1].encode("ascii")
    try:
        return base64_encode(base64_decode(sig)) == sig
    except BadData:
        return False


class SecureCookieCodec:
    """
    Seals a str->str mapping into a cookie-safe token and back.

    - payload {"values": ..., "max_age": ...} is JSON encoded and encrypted
      with Fernet (key = urlsafe base64 of the 32 byte encrypt key)
    - the Fernet token is signed and timestamped with itsdangerous
      (HMAC-SHA256 over the auth key, salted with the cookie name)
    - unseal rejects bad signatures, undecryptable payloads and tokens older
      than the max_age they were sealed with (negative max_age = deleted)
    """

    def __init__(
        self,
        auth_key: str | bytes,
        encrypt_key: str | bytes,
        max_length: int = DEFAULT_MAX_LENGTH,
    ):
        encrypt = _as_bytes(encrypt_key)
        if len(encrypt) != ENCRYPT_KEY_LENGTH:
            raise ValueError(f"encrypt key must be {ENCRYPT_KEY_LENGTH} bytes, got {len(encrypt)}")
        self._fernet = Fernet(base64.urlsafe_b64encode(encrypt))
        self._auth_key = _as_bytes(auth_key)
        self.max_length = max_length

    def _serializer(self, name: str) -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(
            self._auth_key,
            salt=name,
            signer_kwargs={"digest_method": hashlib.sha256},
        )

    def seal(self, name: str, values: dict[str, str], max_age: int) -> str:
        """Encrypt and sign values for the cookie called name."""
        try:
            payload = json.dumps({"values": values, "max_age": max_age}, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise SealError(f"session values are not serializable: {e}") from e

        inner = self._fernet.encrypt(payload.encode("utf-8")).decode("ascii")
        token = self._serializer(name).dumps(inner)
        if self.max_length and len(token) > self.max_length:
            raise SealError(
                f"sealed cookie is {len(token)} bytes, limit is {self.max_length}"
            )
        return token

    def unseal(self, name: str, token: str) -> dict[str, str]:
        """Verify, decrypt and expire-check a token produced by seal()."""
        if self.max_length and len(token) > self.max_length:
            raise UnsealError("cookie value too long")

        try:
            inner, signed_at = self._serializer(name).loads(token, return_timestamp=True)
        except BadData as e:
            raise UnsealError("signature verification failed") from e
        if not _canonical_signature(token):
            raise UnsealError("signature verification failed")
        if not isinstance(inner, str):
            raise UnsealError("unexpected token layout")

        try:
            payload = json.loads(self._fernet.decrypt(inner.encode("ascii")))
        except (InvalidToken, ValueError) as e:
            raise UnsealError("decryption failed") from e

        values = payload.get("values") if isinstance(payload, dict) else None
        max_age = payload.get("max_age") if isinstance(payload, dict) else None
        if not isinstance(values, dict) or not isinstance(max_age, int):
            raise UnsealError("unexpected payload layout")

        age = int(time.time()) - int(signed_at.timestamp())
        if max_age < 0 or (max_age > 0 and age > max_age):
            raise UnsealError(f"cookie expired (age {age}s, max age {max_age}s)")

        result = {k: v for k, v in values.items() if isinstance(v, str)}
        if len(result) != len(values):
            logger.warning(
                "Dropped %d non-string entries from cookie %s", len(values) - len(result), name
            )
        return result
