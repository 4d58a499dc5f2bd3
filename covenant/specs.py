r"""
Covenant option specifications (consumed by covenant.parsers.options).

Overview
- Specs
  • Flag: presence-only switch (no payload), e.g. --fancy. Parses to True.
  • MultiOption: repeatable option consuming one following token per occurrence,
    restricted to a fixed, ordered set of choices, e.g. -s/--state acc.

- Shared fields (read-only after construction)
  • key: identifier under which the parsed value is stored.
  • names: the option tokens that select this spec, in declaration order.
  • default: value used when the option does not appear.
  • kind: Kind.FLAG or Kind.MULTI.

Validation (eager, at construction)
- key must be an identifier string.
- names: at least one, each a non-blank string, no duplicates within a spec.
- MultiOption choices: strings, no duplicates; default: a sequence.
Construction arguments are checked with the covenant validators, so bad input
surfaces as ValidationFailure (a ValueError) carrying the usual payload.

Notes
- names are not checked for overlap *across* specs; a parser scans specs in
  declaration order and the first match wins.

Examples
    >>> state = MultiOption("state", "-s", "--state", "--filter-by-state", choices=("acc", "prop"))
    >>> fancy = Flag("fancy", "--fancy")
"""
import functools
import operator
from enum import Enum

from .utils import Unset, coalesce
from .validators import Tag, all_of, always_valid, every, predicate, type_of

_identifier = all_of((type_of(Tag.STRING), predicate("identifier", str.isidentifier)))
_name = all_of((type_of(Tag.STRING), predicate("non-blank option name", lambda name: bool(name.strip()))))
_choices = every(type_of(Tag.STRING))
_sequence = every(always_valid)


class Kind(Enum):
    FLAG = "flag"
    MULTI = "multi"


class OptionSpec:
    """
    base of Flag and MultiOption (not instantiated directly).
    """
    __slots__ = ("_key", "_names", "_default")
    __typename__ = "option-spec"
    __displayable__ = ("key", "names", "default")

    kind = Unset

    def __init__(self, key, /, *names, default):
        if type(self) is OptionSpec:
            raise TypeError("OptionSpec is abstract; use Flag or MultiOption")
        if not names:
            raise TypeError(f"{self.__typename__} must specify at least one name")

        _identifier(key)
        for name in names:
            _name(name)
        if len(set(names)) != len(names):
            raise ValueError(f"{self.__typename__} names cannot contain duplicates")

        self._key = key
        self._names = tuple(names)
        self._default = default

    @property
    def key(self):
        return self._key

    @property
    def names(self):
        return self._names

    @property
    def default(self):
        return self._default

    def matches(self, token, /):
        return token in self._names

    def __rich_repr__(self):
        for name in type(self).__displayable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"{type(self).__typename__}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


class Flag(OptionSpec):
    __slots__ = ()
    __typename__ = "flag"

    kind = Kind.FLAG

    def __init__(self, key, /, *names, default=False):
        super().__init__(key, *names, default=default)


class MultiOption(OptionSpec):
    __slots__ = ("_choices",)
    __typename__ = "multi-option"
    __displayable__ = ("key", "names", "choices", "default")

    kind = Kind.MULTI

    def __init__(self, key, /, *names, choices, default=Unset):
        default = coalesce(default, ())
        _choices(choices)
        if len(set(choices)) != len(choices):
            raise ValueError(f"{self.__typename__} choices cannot contain duplicates")
        _sequence(default)

        super().__init__(key, *names, default=tuple(default))
        self._choices = tuple(choices)

    @property
    def choices(self):
        return self._choices

    def accepts(self, value, /):
        return value in self._choices


__all__ = (
    "Kind",
    "OptionSpec",
    "Flag",
    "MultiOption",
)
