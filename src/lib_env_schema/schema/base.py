"""Shared contract for every field schema.

Purpose
-------
Define the immutable value types all field variants build on: refinement rules,
documentation metadata, coercion results, and :class:`BaseSchema` itself with
its copy-on-write builder methods.

Contents
--------
* :data:`NO_DEFAULT` – sentinel meaning "no default configured".
* :class:`ValidationRule` – one named refinement predicate.
* :class:`SchemaMetadata` – secret flag, description, example.
* :class:`CoercionResult` – success/failure of turning a raw string into a value.
* :class:`BaseSchema` – frozen dataclass every variant extends.

System Role
-----------
The validation engine only ever talks to :class:`BaseSchema`; the variants in
sibling modules plug in ``coerce``, the type description, and the synthesized
example. Builder methods return new instances via :func:`dataclasses.replace`
so a schema held elsewhere never changes underneath its owner.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, ClassVar, Final, Generic, TypeVar

T = TypeVar("T")
S = TypeVar("S", bound="BaseSchema[Any]")


class _NoDefault:
    """Marker type for :data:`NO_DEFAULT`; ``None`` is a legitimate default."""

    _instance: _NoDefault | None = None

    def __new__(cls) -> _NoDefault:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Final[Any] = _NoDefault()


@dataclass(frozen=True, slots=True)
class ValidationRule(Generic[T]):
    """Named predicate applied to a successfully coerced value.

    Attributes
    ----------
    name:
        Rule identifier (``"min"``, ``"email"``, ``"custom"`` …). Variants read
        it back when describing themselves.
    message:
        Message reported when :attr:`check` returns ``False``.
    check:
        Predicate over the typed value.
    argument:
        Optional rule parameter kept for descriptions (e.g. the length bound).
    """

    name: str
    message: str
    check: Callable[[T], bool]
    argument: Any = None


@dataclass(frozen=True, slots=True)
class SchemaMetadata:
    """Documentation and masking metadata attached to a field."""

    is_secret: bool = False
    description: str | None = None
    example: str | None = None


@dataclass(frozen=True, slots=True)
class CoercionResult(Generic[T]):
    """Outcome of :meth:`BaseSchema.coerce`.

    Examples
    --------
    >>> CoercionResult.ok(3).value
    3
    >>> CoercionResult.fail("nope").success
    False
    """

    success: bool
    value: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, value: T) -> CoercionResult[T]:
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str) -> CoercionResult[T]:
        return cls(success=False, error=error)


@dataclass(frozen=True, slots=True)
class BaseSchema(Generic[T]):
    """Immutable description of how to validate one named input.

    Why
    ----
    Every variant shares presence semantics (optional/default), documentation
    metadata, and an ordered rule chain. Keeping those here lets the engine
    treat all variants uniformly.

    What
    ----
    Subclasses implement :meth:`coerce`, :meth:`get_type_description`, and
    :meth:`_default_example`. Builder methods never mutate ``self``.

    Examples
    --------
    >>> from lib_env_schema.schema import string
    >>> base = string()
    >>> hidden = base.secret().min_length(3)
    >>> base.metadata.is_secret, hidden.metadata.is_secret, len(hidden.rules)
    (False, True, 1)
    """

    kind: ClassVar[str] = "base"

    is_optional: bool = False
    default_value: Any = NO_DEFAULT
    metadata: SchemaMetadata = field(default_factory=SchemaMetadata)
    rules: tuple[ValidationRule[Any], ...] = ()

    # -- builders -----------------------------------------------------------

    def optional(self: S) -> S:
        """Allow the variable to be absent; it then resolves to ``None``."""

        return replace(self, is_optional=True)

    def default(self: S, value: Any) -> S:
        """Resolve absent or empty input to *value*; a default always wins over optional."""

        return replace(self, is_optional=False, default_value=value)

    def secret(self: S) -> S:
        """Mask received and example values of this variable in every report."""

        return replace(self, metadata=replace(self.metadata, is_secret=True))

    def description(self: S, text: str) -> S:
        """Attach documentation used by ``.env.example`` generation."""

        return replace(self, metadata=replace(self.metadata, description=text))

    def example(self: S, value: str) -> S:
        """Attach an explicit example value."""

        return replace(self, metadata=replace(self.metadata, example=value))

    def refine(self: S, check: Callable[[Any], bool], message: str, name: str = "custom") -> S:
        """Append a custom rule; rules run in registration order after coercion."""

        return self._with_rule(ValidationRule(name=name, message=message, check=check))

    def _with_rule(self: S, rule: ValidationRule[Any]) -> S:
        return replace(self, rules=(*self.rules, rule))

    # -- behaviour ----------------------------------------------------------

    @property
    def has_default(self) -> bool:
        return self.default_value is not NO_DEFAULT

    @property
    def is_secret(self) -> bool:
        return self.metadata.is_secret

    def coerce(self, raw: str) -> CoercionResult[T]:
        """Convert *raw* into the typed value or describe why it cannot be converted."""

        raise NotImplementedError

    def first_failed_rule(self, value: Any) -> ValidationRule[Any] | None:
        """Return the first rule rejecting *value*, or ``None`` when all pass."""

        for rule in self.rules:
            if not rule.check(value):
                return rule
        return None

    def rule_named(self, name: str) -> ValidationRule[Any] | None:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def get_type_description(self) -> str:
        """Human-readable constraint summary used in reports and docs."""

        raise NotImplementedError

    def get_example(self) -> str:
        """Return the explicit example or a variant-specific synthesized one."""

        if self.metadata.example is not None:
            return self.metadata.example
        return self._default_example()

    def _default_example(self) -> str:
        raise NotImplementedError
