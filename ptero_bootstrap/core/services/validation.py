"""
Validation and randomness helpers (pure, except ``is_routable_ip``).

Used by the input collectors and by the install scripts that consume
the CLI (``check-email``, ``password``).
"""

from __future__ import annotations

import ipaddress
import re
import secrets
import string
from collections.abc import Iterable

from ptero_bootstrap.core.services.execution.subprocess_runner import run_command

# local-part: starts and ends alphanumeric, with . - _ + allowed between
# domain:     alphanumeric runs joined by . - _, then a 2+ letter TLD
EMAIL_REGEX = re.compile(
    r"[A-Za-z0-9](?:[A-Za-z0-9.+_-]*[A-Za-z0-9])?"
    r"@"
    r"[A-Za-z0-9]+(?:[.\-_][A-Za-z0-9]+)*\.[A-Za-z]{2,}"
)

# Letters, digits and punctuation. The single quote is excluded so a
# generated password can always be wrapped in '...' by a shell script.
PASSWORD_CHARSET = frozenset(
    string.ascii_letters + string.digits + string.punctuation.replace("'", "")
)

# Bytes pulled from the CSPRNG per draw
_DRAW_SIZE = 100


def valid_email(value: str) -> bool:
    """True if ``value`` is a whole, email-shaped string."""
    return EMAIL_REGEX.fullmatch(value) is not None


def gen_password(length: int) -> str:
    """Generate a random password of exactly ``length`` characters.

    Random bytes are drawn in batches and filtered down to
    PASSWORD_CHARSET until enough characters have accumulated; the
    surplus of the last batch is dropped.

    Raises:
        ValueError: If ``length`` is less than 1.
    """
    if length < 1:
        raise ValueError(f"Password length must be >= 1, got {length}")

    password = ""
    while len(password) < length:
        draw = secrets.token_bytes(_DRAW_SIZE)
        password += "".join(chr(b) for b in draw if chr(b) in PASSWORD_CHARSET)
    return password[:length]


def contains(target: str, items: Iterable[str]) -> bool:
    """True if ``target`` equals any element of ``items``."""
    return any(item == target for item in items)


def is_routable_ip(address: str) -> bool:
    """True if ``address`` is an IP the kernel has a route to.

    Asks ``ip route get``, so it also rejects addresses on networks the
    host cannot reach. Malformed addresses are rejected without
    spawning anything.
    """
    try:
        ipaddress.ip_address(address)
    except ValueError:
        return False
    return run_command(["ip", "route", "get", address], timeout=5)["ok"]
