"""
totpboard package
=================

Terminal dashboard for TOTP codes (RFC 6238), one row per account from a
YAML config, redrawn every second.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP: code = Truncate(HMAC-SHA1(key=secret, msg=counter)) mod 10^6
- TOTP: HOTP with counter = floor(unix_time / 30)
- Countdown: 30 - (unix_time mod 30), always in [1, 30]

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from totpboard import generate, remaining
>>> generate("JBSWY3DPEHPK3PXP", 59)
'996554'
>>> remaining(59)
1
"""
from .config_loader import (
    Account,
    Config,
    ConfigError,
    EmptyConfigError,
    FileError,
    ParseError,
    load_config,
)
from .otp_core import InvalidSecretError, generate, hotp, remaining
from .renderer import render

__all__ = [
    "Account",
    "Config",
    "ConfigError",
    "EmptyConfigError",
    "FileError",
    "ParseError",
    "load_config",
    "InvalidSecretError",
    "generate",
    "hotp",
    "remaining",
    "render",
]
