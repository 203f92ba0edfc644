#!/usr/bin/env python3
"""
otp_core.py — TOTP / HOTP primitives for the dashboard (RFC 4226 & RFC 6238).

- Pure functions only: no terminal output, no file I/O.
- HMAC-SHA1, 30s step, 6 digits (the Google Authenticator defaults).
- `code_or_placeholder` is the only function that swallows an error, and it
  replaces the code with ERROR_PLACEHOLDER so the failure stays visible.
"""

from typing import Optional
import base64
import binascii
import hashlib
import hmac
import logging
import struct
import time

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # standard: 6 digits
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
T0 = 0                      # Unix epoch start
ERROR_PLACEHOLDER = "ERROR"


class InvalidSecretError(ValueError):
    """The shared secret is not valid Base32."""


# --- RFC helpers -----------------------------------------------------------
def decode_secret(secret_b32: str) -> bytes:
    """
    Decode a Base32 secret into raw key bytes.

    - Case-insensitive.
    - Spaces and dashes are dropped ("JBSW Y3DP ..." is how many sites print it).
    - Missing '=' padding is restored.

    Raises:
        InvalidSecretError: empty secret or not valid Base32
    """
    cleaned = "".join(str(secret_b32).split()).replace("-", "")
    try:
        raw = cleaned.encode("ascii").upper()
    except UnicodeEncodeError as e:
        raise InvalidSecretError("Base32 secret must be ASCII") from e
    if not raw:
        raise InvalidSecretError("Empty Base32 secret")
    raw += b"=" * (-len(raw) % 8)
    try:
        return base64.b32decode(raw, casefold=True)
    except binascii.Error as e:
        raise InvalidSecretError("Invalid Base32 secret") from e


def int_to_bytes(i: int) -> bytes:
    # 8-byte big-endian counter, RFC 4226 section 5.2
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    offset = low nibble of the last byte; take 4 bytes from there and clear
    the sign bit, giving a 31-bit integer.
    """
    offset = hmac_digest[-1] & 0x0F
    return struct.unpack(">I", hmac_digest[offset:offset + 4])[0] & 0x7FFFFFFF


def hotp(secret_b32: str, counter: int, digits: int = DEFAULT_DIGITS) -> str:
    """
    HOTP code for `counter`, zero-padded to `digits`.

    Raises:
        InvalidSecretError: if the secret cannot be decoded
    """
    key = decode_secret(secret_b32)
    digest = hmac.new(key, int_to_bytes(counter), hashlib.sha1).digest()
    otp_val = dynamic_truncate(digest) % (10 ** digits)
    return str(otp_val).zfill(digits)


def time_counter(at_time: float, timestep: int = DEFAULT_TIME_STEP) -> int:
    return int((at_time - T0) // timestep)


def generate(secret_b32: str, at_time: Optional[float] = None) -> str:
    """
    TOTP code (RFC 6238) for the window containing `at_time`.

    Arguments:
        secret_b32: Base32 secret
        at_time: Unix time in seconds (None -> time.time())

    Returns:
        6-digit code as a string. The same for every `at_time` inside one
        30-second window.

    Raises:
        InvalidSecretError: if the secret cannot be decoded
    """
    if at_time is None:
        at_time = time.time()
    return hotp(secret_b32, time_counter(at_time), DEFAULT_DIGITS)


def remaining(at_time: Optional[float] = None) -> int:
    """Seconds until the next 30s boundary, in [1, 30]."""
    if at_time is None:
        at_time = time.time()
    return DEFAULT_TIME_STEP - int(at_time) % DEFAULT_TIME_STEP


def code_or_placeholder(secret_b32: str, at_time: Optional[float] = None) -> str:
    """Like `generate`, but returns ERROR_PLACEHOLDER for a bad secret."""
    try:
        return generate(secret_b32, at_time)
    except InvalidSecretError as e:
        logger.debug("TOTP generation failed: %s", e)
        return ERROR_PLACEHOLDER
