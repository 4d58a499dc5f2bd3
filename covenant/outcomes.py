"""
Parse outcomes.

A matcher either applies to its input and returns Found(bindings), or does not
apply and returns the `absent` singleton. `absent` is not a failure: it lets a
dispatcher move on to the next candidate matcher.

Semantics
- absent is falsy, a per-process singleton, renders as "absent" (dim in rich),
  and survives copy/deepcopy/pickle with its identity.
- Found is truthy and exposes a read-only `bindings` mapping. It compares equal
  to another Found with equal bindings.
"""
import functools
from types import MappingProxyType

from rich.text import Text


class absenttype:
    """
    type of the `absent` singleton (final).
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __reduce__(self):
        return "absent"

    def __bool__(self):
        return False

    def __rich__(self):
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "absent"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'absenttype' is not an acceptable base type")


absent = absenttype()


class Found:
    __slots__ = ("_bindings",)

    def __init__(self, bindings, /):
        self._bindings = MappingProxyType(dict(bindings))

    @property
    def bindings(self):
        return self._bindings

    def __getitem__(self, name, /):
        return self._bindings[name]

    def __eq__(self, other, /):
        if not isinstance(other, Found):
            return NotImplemented
        return self._bindings == other._bindings

    __hash__ = None

    def __bool__(self):
        return True

    def __rich_repr__(self):
        yield dict(self._bindings)

    def __repr__(self):
        return "Found(%r)" % dict(self._bindings)


__all__ = (
    "absenttype",
    "absent",
    "Found",
)
