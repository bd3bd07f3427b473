"""String field schema."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import Literal

from ..domain.errors import SchemaDefinitionError
from .base import BaseSchema, CoercionResult, ValidationRule

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

IpVersion = Literal["v4", "v6", "any"]


@dataclass(frozen=True, slots=True)
class StringSchema(BaseSchema[str]):
    """Schema for plain string variables; coercion is the identity.

    Examples
    --------
    >>> schema = StringSchema().min_length(3).max_length(8)
    >>> schema.get_type_description()
    'string, min 3 chars, max 8 chars'
    >>> schema.first_failed_rule("ab").message
    'Must be at least 3 characters'
    """

    kind = "string"

    def coerce(self, raw: str) -> CoercionResult[str]:
        return CoercionResult.ok(raw)

    def min_length(self, minimum: int) -> StringSchema:
        return self._with_rule(
            ValidationRule("minLength", f"Must be at least {minimum} characters", lambda v: len(v) >= minimum, minimum)
        )

    def max_length(self, maximum: int) -> StringSchema:
        return self._with_rule(
            ValidationRule("maxLength", f"Must be at most {maximum} characters", lambda v: len(v) <= maximum, maximum)
        )

    def length(self, exact: int) -> StringSchema:
        return self._with_rule(
            ValidationRule("length", f"Must be exactly {exact} characters", lambda v: len(v) == exact, exact)
        )

    def pattern(self, regex: str | re.Pattern[str], message: str | None = None) -> StringSchema:
        """Require *regex* to match somewhere in the value; anchor it for an exact match."""

        compiled = re.compile(regex) if isinstance(regex, str) else regex
        return self._with_rule(
            ValidationRule(
                "pattern",
                message or f"Must match pattern {compiled.pattern}",
                lambda v: compiled.search(v) is not None,
                compiled.pattern,
            )
        )

    def non_empty(self) -> StringSchema:
        """Reject whitespace-only values (the engine already rejects ``""``)."""

        return self._with_rule(ValidationRule("nonEmpty", "Must not be empty", lambda v: len(v.strip()) > 0))

    def starts_with(self, prefix: str) -> StringSchema:
        return self._with_rule(
            ValidationRule("startsWith", f'Must start with "{prefix}"', lambda v: v.startswith(prefix), prefix)
        )

    def ends_with(self, suffix: str) -> StringSchema:
        return self._with_rule(
            ValidationRule("endsWith", f'Must end with "{suffix}"', lambda v: v.endswith(suffix), suffix)
        )

    def email(self) -> StringSchema:
        """Require a simple ``local@domain.tld`` shape (not full RFC 5322)."""

        return self._with_rule(
            ValidationRule("email", "Must be a valid email address", lambda v: _EMAIL_RE.match(v) is not None)
        )

    def uuid(self) -> StringSchema:
        return self._with_rule(ValidationRule("uuid", "Must be a valid UUID", lambda v: _UUID_RE.match(v) is not None))

    def ip(self, version: IpVersion = "any") -> StringSchema:
        """Require an IPv4 and/or IPv6 address.

        Examples
        --------
        >>> check = StringSchema().ip(version="v4")
        >>> check.first_failed_rule("192.168.1.1") is None, check.first_failed_rule("192.168.01.1").message
        (True, 'Must be a valid IPV4 address')
        """

        if version not in ("v4", "v6", "any"):
            raise SchemaDefinitionError(f"IP version must be 'v4', 'v6' or 'any', got {version!r}")
        label = "" if version == "any" else version.upper()
        return self._with_rule(
            ValidationRule("ip", f"Must be a valid IP{label} address", lambda v: _is_ip(v, version), version)
        )

    def get_type_description(self) -> str:
        parts = ["string"]
        for rule in self.rules:
            if rule.name == "minLength":
                parts.append(f"min {rule.argument} chars")
            elif rule.name == "maxLength":
                parts.append(f"max {rule.argument} chars")
            elif rule.name == "email":
                return "email"
            elif rule.name == "uuid":
                return "UUID"
        return ", ".join(parts)

    def _default_example(self) -> str:
        for rule in self.rules:
            if rule.name == "email":
                return "user@example.com"
            if rule.name == "uuid":
                return "550e8400-e29b-41d4-a716-446655440000"
            if rule.name == "ip":
                return "::1" if rule.argument == "v6" else "127.0.0.1"
        return "your_value_here"


def _is_ip(value: str, version: IpVersion) -> bool:
    if version in ("v4", "any") and is_ipv4(value):
        return True
    if version in ("v6", "any") and is_ipv6(value):
        return True
    return False


def is_ipv4(value: str) -> bool:
    """Return ``True`` for canonical dotted-quad IPv4 addresses.

    Octets above 255, leading zeros and anything other than four parts are
    rejected.

    Examples
    --------
    >>> is_ipv4("10.0.0.1"), is_ipv4("256.1.1.1"), is_ipv4("01.1.1.1"), is_ipv4("1.1.1")
    (True, False, False, False)
    """

    parts = value.split(".")
    if len(parts) != 4:
        return False
    for part in parts:
        if not part.isascii() or not part.isdigit():
            return False
        if str(int(part)) != part or int(part) > 255:
            return False
    return True


def is_ipv6(value: str) -> bool:
    """Return ``True`` for full or ``::``-compressed IPv6 addresses.

    Examples
    --------
    >>> is_ipv6("2001:db8::1"), is_ipv6("::"), is_ipv6("1.2.3.4"), is_ipv6("2001:db8::g")
    (True, True, False, False)
    """

    if "%" in value:
        return False
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def string() -> StringSchema:
    """Create a new string schema."""

    return StringSchema()
