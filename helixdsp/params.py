# -*- coding: utf-8 -*-
"""
Tunable Settings - Validated iteration settings declared via typing.Annotated.

Numerical routines such as the Wilson-Burg factorizer expose a handful of
settings (iteration caps, tolerances, padding) that must be validated once
and may be overridden per call. A ``Tunable`` subclass declares them as
class-body annotations carrying a ``Range`` bound and a ``Desc`` text::

    from typing import Annotated
    from helixdsp.params import Desc, Range, Tunable

    class Factorizer(Tunable):
        max_iterations: Annotated[int, Range(min=1), Desc('Iteration cap')] = 100

The annotations are collected into ``cls.__settings__`` when the class is
defined and a keyword-only ``__init__`` is generated for them. Bound
violations raise ``InvalidArgumentError``; values of the wrong type raise
``TypeError``.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import inspect
import logging
import numbers
from typing import Annotated, Any, Dict, Optional, Tuple, get_origin, get_type_hints

# Third-party
import numpy as np

# helixdsp internal
from helixdsp.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


# ── Markers ─────────────────────────────────────────────────────────────


class Range:
    """Numeric bound on a setting.

    Parameters
    ----------
    min : int or float, optional
        Lower bound, inclusive unless ``exclusive_min`` is set.
    max : int or float, optional
        Inclusive upper bound.
    exclusive_min : bool
        Reject values equal to ``min``. Default ``False``.
    """

    __slots__ = ('min', 'max', 'exclusive_min')

    def __init__(self, min=None, max=None, exclusive_min: bool = False) -> None:
        self.min = min
        self.max = max
        self.exclusive_min = exclusive_min

    def check(self, name: str, value: Any) -> None:
        """Raise ``InvalidArgumentError`` if *value* is out of bounds."""
        if self.min is not None:
            if value < self.min or (self.exclusive_min and value == self.min):
                relation = "greater than" if self.exclusive_min else "at least"
                raise InvalidArgumentError(
                    f"{name} must be {relation} {self.min!r}, got {value!r}"
                )
        if self.max is not None and value > self.max:
            raise InvalidArgumentError(
                f"{name} must be at most {self.max!r}, got {value!r}"
            )

    def __repr__(self) -> str:
        parts = [f"{k}={getattr(self, k)!r}" for k in ('min', 'max')
                 if getattr(self, k) is not None]
        if self.exclusive_min:
            parts.append("exclusive_min=True")
        return f"Range({', '.join(parts)})"


class Desc:
    """Human-readable description of a setting."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# ── Settings ────────────────────────────────────────────────────────────


class Setting:
    """One declared setting of a ``Tunable`` class.

    Attributes
    ----------
    name : str
        Keyword name.
    kind : type
        ``int``, ``float`` or ``bool``.
    default : Any
        Value used when the keyword is omitted.
    bound : Range or None
        Numeric bound.
    description : str
        Text from ``Desc``.
    """

    __slots__ = ('name', 'kind', 'default', 'bound', 'description')

    def __init__(self, name: str, kind: type, default: Any,
                 bound: Optional[Range], description: str) -> None:
        self.name = name
        self.kind = kind
        self.default = default
        self.bound = bound
        self.description = description

    def validate(self, value: Any) -> None:
        """Check the type and bound of *value*.

        ``bool`` settings accept only ``bool``. Numeric settings reject
        ``bool``; ``float`` settings also accept integers.
        """
        if self.kind is bool:
            ok = isinstance(value, (bool, np.bool_))
        elif isinstance(value, bool):
            ok = False
        elif self.kind is float:
            ok = isinstance(value, numbers.Real)
        else:
            ok = isinstance(value, numbers.Integral)
        if not ok:
            raise TypeError(
                f"{self.name} must be {self.kind.__name__}, "
                f"got {type(value).__name__}"
            )
        if self.bound is not None:
            self.bound.check(self.name, value)

    def __repr__(self) -> str:
        return (
            f"Setting({self.name!r}, {self.kind.__name__}, "
            f"default={self.default!r}, bound={self.bound!r})"
        )


def collect_settings(cls: type) -> Tuple[Setting, ...]:
    """Collect the ``Annotated[..., Range/Desc]`` settings declared on *cls*.

    Settings are ordered parent-first, in declaration order. Annotations
    without a ``Range`` or ``Desc`` marker are ignored.

    Raises
    ------
    TypeError
        If a setting has no default or an unsupported type.
    """
    hints = get_type_hints(cls, include_extras=True)
    names = []
    for klass in reversed(cls.__mro__):
        for name in vars(klass).get('__annotations__', {}):
            if name in hints and name not in names:
                names.append(name)

    settings = []
    for name in names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        markers = hint.__metadata__
        bound = next((m for m in markers if isinstance(m, Range)), None)
        desc = next((m for m in markers if isinstance(m, Desc)), None)
        if bound is None and desc is None:
            continue
        kind = hint.__origin__
        if kind not in (int, float, bool):
            raise TypeError(
                f"{cls.__qualname__}.{name}: settings must be int, float "
                f"or bool, got {kind!r}"
            )
        if not hasattr(cls, name):
            raise TypeError(f"{cls.__qualname__}.{name} needs a default")
        setting = Setting(name, kind, getattr(cls, name), bound,
                          desc.text if desc else '')
        setting.validate(setting.default)
        settings.append(setting)
    return tuple(settings)


def _keyword_init(settings: Tuple[Setting, ...]):
    """Generate a keyword-only ``__init__`` that validates *settings*."""

    def __init__(self, **kwargs):
        unknown = set(kwargs) - {s.name for s in settings}
        if unknown:
            raise TypeError(
                f"{type(self).__name__}() got unexpected keyword "
                f"arguments: {', '.join(sorted(unknown))}"
            )
        for s in settings:
            value = kwargs.get(s.name, s.default)
            s.validate(value)
            setattr(self, s.name, value)

    __init__.__signature__ = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [inspect.Parameter(s.name, inspect.Parameter.KEYWORD_ONLY, default=s.default)
           for s in settings]
    )
    __init__.__qualname__ = '__init__'
    return __init__


class Tunable:
    """Base class for objects configured through ``Annotated`` settings.

    Subclasses get ``__settings__`` and a generated keyword-only
    ``__init__``. ``_resolve_params(overrides)`` merges per-call overrides
    with the instance values and validates them.
    """

    #: Settings collected by ``__init_subclass__``.
    __settings__: Tuple[Setting, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__settings__ = collect_settings(cls)
        if cls.__settings__ and '__init__' not in cls.__dict__:
            cls.__init__ = _keyword_init(cls.__settings__)

    def _resolve_params(self, overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Instance settings with *overrides* applied, all validated.

        Raises
        ------
        TypeError
            If an override names no setting or has the wrong type.
        InvalidArgumentError
            If a value is out of bounds.
        """
        settings = type(self).__settings__
        unknown = set(overrides) - {s.name for s in settings}
        if unknown:
            raise TypeError(
                f"{type(self).__name__} has no settings named "
                f"{', '.join(sorted(unknown))}"
            )
        resolved = {}
        for s in settings:
            value = overrides.get(s.name, getattr(self, s.name))
            s.validate(value)
            resolved[s.name] = value
        logger.debug("%s settings: %s", type(self).__name__, resolved)
        return resolved

    def __repr__(self) -> str:
        args = ', '.join(
            f"{s.name}={getattr(self, s.name)!r}" for s in type(self).__settings__
        )
        return f"{type(self).__name__}({args})"
