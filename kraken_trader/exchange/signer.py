"""
Kraken private endpoint request signing.

API-Sign = base64(HMAC-SHA512(base64decode(secret),
                              path + SHA256(nonce + body)))
"""

import base64
import binascii
import hashlib
import hmac

from ..errors import ConfigurationError


def decode_secret(secret: str) -> bytes:
    """
    Decode a base64 API secret.

    Raises:
        ConfigurationError: If the secret is empty or not valid base64
    """
    if not secret:
        raise ConfigurationError("API secret is empty", field="exchange.api_secret")

    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError(
            f"API secret is not valid base64: {e}",
            field="exchange.api_secret"
        )


def sign_with_key(path: str, nonce: int, body: str, key: bytes) -> str:
    """Sign with an already decoded secret key."""
    message = (str(nonce) + body).encode("utf-8")
    digest = hashlib.sha256(message).digest()
    mac = hmac.new(key, path.encode("utf-8") + digest, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode("ascii")


def sign_request(path: str, nonce: int, body: str, secret: str) -> str:
    """
    Compute the API-Sign header for a private request.

    Args:
        path: URI path, e.g. ``/0/private/AddOrder``
        nonce: Nonce included in the body
        body: Form-encoded request body
        secret: Base64 API secret

    Returns:
        Base64 encoded signature

    Raises:
        ConfigurationError: If the secret is not valid base64
    """
    return sign_with_key(path, nonce, body, decode_secret(secret))


class RequestSigner:
    """Signer holding the decoded secret; construction fails fast on a bad secret."""

    def __init__(self, api_secret: str):
        self._key = decode_secret(api_secret)

    def sign(self, path: str, nonce: int, body: str) -> str:
        return sign_with_key(path, nonce, body, self._key)
