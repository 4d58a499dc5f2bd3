r"""
Covenant validators: composable contracts over plain Python data.

Overview
- A validator is a callable `value -> value`. It returns its argument unchanged
  when the value is acceptable and raises ValidationFailure otherwise. Validators
  never mutate or rebuild what they check (structural validators hand back the
  very same container).
- Validators are ordinary values: store them, pass them around, and combine them
  with the combinators below. Every combinator consumes and produces the same
  contract, so no adapter code is ever needed.

Core
  • equals(x), member_of(container), type_of(tag), predicate(name, p)
  • all_of(validators): conjunction, left to right, first failure propagates verbatim.
  • any_of(validators): first success wins; exhaustion raises one generic failure.
  • always_valid: identity placeholder.

Structural
  • contains(k), optional_key(k, v), key(k, v)
  • optional_keys(spec), contains_all(ks), contains_only(ks), keys(spec)
  • every(v)

Results
  • validate(v, value) -> Valid(value) | Invalid(failure), for callers that prefer
    pattern matching over exception handling:

        match validate(keys({"id": uuid}), document):
            case Valid(value): ...
            case Invalid(failure): print(failure.payload)

Type tags
  • tagof(value) maps a runtime value onto the small tagged union used by
    type_of(): null, boolean, integer, float, string, bytes, list, dict, set,
    procedure (any other object is tagged with its type name).
"""
import builtins
from collections.abc import Container, Mapping, Sequence, Set
from enum import StrEnum
from typing import NamedTuple

from .faults import FaultCode, ValidationFailure
from .messages import render
from .utils import rename


class Tag(StrEnum):
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BYTES = "bytes"
    LIST = "list"
    DICT = "dict"
    SET = "set"
    PROCEDURE = "procedure"


def tagof(value, /):
    """
    return the type tag of a value.

    notes
    - bool is checked before int (True is not an integer here).
    - any non-string sequence is a list, any mapping is a dict, any set-like is a set.
    - values outside the union are tagged with their Python type name.
    """
    match value:
        case None:
            return Tag.NULL
        case bool():
            return Tag.BOOLEAN
        case int():
            return Tag.INTEGER
        case float():
            return Tag.FLOAT
        case str():
            return Tag.STRING
        case bytes() | bytearray():
            return Tag.BYTES
        case Mapping():
            return Tag.DICT
        case Set():
            return Tag.SET
        case Sequence():
            return Tag.LIST
        case _ if builtins.callable(value):
            return Tag.PROCEDURE
        case _:
            return type(value).__name__


class Valid(NamedTuple):
    value: object


class Invalid(NamedTuple):
    failure: ValidationFailure

    def __bool__(self):
        return False


def _fail(code, /, **payload):
    raise ValidationFailure(render(code, **payload), code, **payload)


def _validators(validators, caller, /):
    validators = tuple(validators)
    for validator in validators:
        if not builtins.callable(validator):
            raise TypeError("%s() arguments must be validators (callables)" % caller)
    return validators


def validate(validator, value, /):
    """
    run a validator and capture its outcome as a result.

    returns
    - Valid(value) when the validator accepted the value.
    - Invalid(failure) when it raised ValidationFailure; any other exception propagates.
    """
    try:
        return Valid(validator(value))
    except ValidationFailure as failure:
        return Invalid(failure)


@rename("always_valid")
def always_valid(value, /):
    return value


def equals(expected, /):
    """
    accept only values equal to `expected`.

    failure payload: {expected, actual}
    """
    @rename("equals")
    def validator(value, /):
        if value != expected:
            _fail(FaultCode.NOT_EQUAL, expected=expected, actual=value)
        return value
    return validator


def member_of(container, /):
    """
    accept values that are members of `container` (mapping keys, set or sequence items).

    one-shot iterables (generators, iterators) are materialized into a tuple first.

    failure payload: {container, element}
    """
    if not isinstance(container, Container):
        container = tuple(container)

    @rename("member_of")
    def validator(value, /):
        try:
            found = value in container
        except TypeError:  # unhashable value against a hashed container
            found = False
        if not found:
            _fail(FaultCode.NOT_A_MEMBER, container=container, element=value)
        return value
    return validator


def type_of(tag, /):
    """
    accept values whose tagof() equals `tag`.

    failure payload: {value, expected_type}
    """
    if not isinstance(tag, str):
        raise TypeError("type_of() argument must be a type tag")

    @rename("type_of")
    def validator(value, /):
        if tagof(value) != tag:
            _fail(FaultCode.WRONG_TYPE, value=value, expected_type=tag)
        return value
    return validator


def predicate(name, check, /):
    """
    accept values for which check(value) is truthy.

    the failure payload only carries {name}: the rejected value is never disclosed,
    since predicates may wrap sensitive checks such as signature verification.
    """
    if not isinstance(name, str):
        raise TypeError("predicate() first argument must be a string")
    if not builtins.callable(check):
        raise TypeError("predicate() second argument must be callable")

    @rename("predicate")
    def validator(value, /):
        if not check(value):
            _fail(FaultCode.PREDICATE_FAILED, name=name)
        return value
    return validator


def all_of(validators, /):
    """
    conjunction: apply every validator, in order, to the same value.

    - returns the value unchanged when all of them accept it.
    - the first failure propagates verbatim (no aggregation); later validators
      are not evaluated.
    - all_of([]) accepts everything.
    """
    validators = _validators(validators, "all_of")

    @rename("all_of")
    def validator(value, /):
        for each in validators:
            each(value)
        return value
    return validator


def any_of(validators, /):
    """
    disjunction: try alternatives in order and return the first success.

    when every alternative fails, a single generic NO_ALTERNATIVE failure is raised
    with an empty payload; blaming one alternative over another would be arbitrary.
    any_of([]) rejects everything.
    """
    validators = _validators(validators, "any_of")

    @rename("any_of")
    def validator(value, /):
        for each in validators:
            match validate(each, value):
                case Valid(result):
                    return result
        _fail(FaultCode.NO_ALTERNATIVE)
    return validator


def contains(element, /):
    """
    accept containers holding `element` (key of a mapping, item of a set or sequence).

    failure payload: {element, container}
    """
    @rename("contains")
    def validator(value, /):
        try:
            found = element in value
        except TypeError:  # not a container, or unhashable element
            found = False
        if not found:
            _fail(FaultCode.MISSING_ELEMENT, element=element, container=value)
        return value
    return validator


def optional_key(name, check, /):
    """
    when `name` is a key of the mapping, validate its value with `check`.

    absence is not a failure; non-mapping values are treated as not having the key.
    """
    if not builtins.callable(check):
        raise TypeError("optional_key() second argument must be a validator")

    @rename("optional_key")
    def validator(value, /):
        if isinstance(value, Mapping) and name in value:
            check(value[name])
        return value
    return validator


def key(name, check, /):
    """
    require `name` to be present and its value to satisfy `check`.

    a missing key reports {element: name}; an invalid value reports whatever
    `check` reports.
    """
    return rename(all_of((contains(name), optional_key(name, check))), "key")


def optional_keys(spec, /):
    """
    validate every declared key that is present, in declaration order.

    the value must be a mapping; otherwise NOT_A_MAPPING with {value}.
    """
    if not isinstance(spec, Mapping):
        raise TypeError("optional_keys() argument must be a mapping of validators")
    checks = tuple(optional_key(name, check) for name, check in spec.items())

    @rename("optional_keys")
    def validator(value, /):
        if not isinstance(value, Mapping):
            _fail(FaultCode.NOT_A_MAPPING, value=value)
        for check in checks:
            check(value)
        return value
    return validator


def contains_all(elements, /):
    """
    require every element to be present; the first missing one (left to right) is reported.
    """
    return rename(all_of(map(contains, elements)), "contains_all")


def contains_only(allowed, /):
    """
    accept mappings whose keys are all within `allowed`.

    failure payload: {dict, allowed_keys}
    """
    allowed = list(allowed)

    @rename("contains_only")
    def validator(value, /):
        if not isinstance(value, Mapping) or not all(name in allowed for name in value.keys()):
            _fail(FaultCode.UNEXPECTED_KEYS, dict=value, allowed_keys=allowed)
        return value
    return validator


def keys(spec, /):
    """
    full shape validation: every declared key present, every present key valid.

    presence is checked first, so a missing key is reported even when another
    present key also holds an invalid value.
    """
    if not isinstance(spec, Mapping):
        raise TypeError("keys() argument must be a mapping of validators")
    return rename(all_of((contains_all(spec.keys()), optional_keys(spec))), "keys")


def every(check, /):
    """
    apply `check` to each item of a sequence.

    - the first failing item propagates its failure (no index is attached).
    - on success returns the mapped items (list, or tuple for tuple input), which
      is value-equal to the input since validators return their argument.
    - strings, bytes and mappings are not sequences here: NOT_A_SEQUENCE with {value}.
    """
    if not builtins.callable(check):
        raise TypeError("every() argument must be a validator")

    @rename("every")
    def validator(value, /):
        if not isinstance(value, Sequence) or isinstance(value, str | bytes | bytearray):
            _fail(FaultCode.NOT_A_SEQUENCE, value=value)
        mapped = [check(item) for item in value]
        return tuple(mapped) if isinstance(value, tuple) else mapped
    return validator


__all__ = (
    # Results and tags
    "Tag",
    "tagof",
    "Valid",
    "Invalid",
    "validate",

    # Core
    "always_valid",
    "equals",
    "member_of",
    "type_of",
    "predicate",
    "all_of",
    "any_of",

    # Structural
    "contains",
    "optional_key",
    "key",
    "optional_keys",
    "contains_all",
    "contains_only",
    "keys",
    "every",
)
