"""
Covenant message templates and rendering.

Scope
- TEMPLATES: one printf-style template per FaultCode, with named parameters.
- render(code, **params): pure `template × params -> str`.
- listing(items): join an allowed-values collection for display ("a, b").

Host overrides
- the host application may define a __messages__ mapping in __main__ (FaultCode
  -> template) to reword any message; missing codes fall back to TEMPLATES.

The default wording is a compatibility contract, e.g.
    Invalid argument "X" for option ":state". Valid arguments: acc, prop
"""
from types import MappingProxyType

from .faults import FaultCode

TEMPLATES = MappingProxyType({
    # --- parse faults ---
    FaultCode.MISSING_COMMAND:         'Missing command',
    FaultCode.UNKNOWN_COMMAND:         'Unknown command "%(command)s"',
    FaultCode.INVALID_OPTION:          'Invalid option "%(option)s"',
    FaultCode.MISSING_OPTION_ARGUMENT: 'Missing argument for option ":%(key)s"',
    FaultCode.INVALID_OPTION_ARGUMENT: 'Invalid argument "%(value)s" for option ":%(key)s". Valid arguments: %(choices)s',
    FaultCode.MISSING_ARGUMENT:        'Missing argument "%(name)s"',
    FaultCode.TOO_MANY_ARGUMENTS:      'Too many arguments for command "%(command)s"',

    # --- validation faults ---
    FaultCode.NOT_EQUAL:               'Expected %(expected)r but got %(actual)r',
    FaultCode.NOT_A_MEMBER:            '%(element)r is not a member of %(container)r',
    FaultCode.WRONG_TYPE:              'Expected a value of type %(expected_type)s but got %(value)r',
    FaultCode.PREDICATE_FAILED:        'Value failed check "%(name)s"',
    FaultCode.NO_ALTERNATIVE:          'Value did not match any alternative',
    FaultCode.MISSING_ELEMENT:         '%(element)r not found in %(container)r',
    FaultCode.NOT_A_MAPPING:           'Expected a mapping but got %(value)r',
    FaultCode.UNEXPECTED_KEYS:         'Mapping %(dict)r has keys outside of %(allowed_keys)r',
    FaultCode.NOT_A_SEQUENCE:          'Expected a sequence but got %(value)r',
})


def listing(items, /):
    """
    join allowed values for display, in their given order ("a, b").
    """
    return ", ".join(map(str, items))


def render(code, /, **params):
    """
    render the message for a fault code.

    lookup
    - __main__.__messages__[code] when the host provides it, else TEMPLATES[code].

    errors
    - TypeError when code is not a FaultCode.
    - KeyError when a template refers to a parameter that was not supplied.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("render() argument must be a fault-code")
    template = getattr(__import__("__main__"), "__messages__", {}).get(code, TEMPLATES[code])
    return template % params


__all__ = (
    "TEMPLATES",
    "listing",
    "render",
)
