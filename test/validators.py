"""
Validators behavioral tests (core combinators, structural combinators, results).

Scope
- Validate that every validator returns its argument unchanged on success.
- Validate failure codes and payloads for each combinator.
- Validate all_of/any_of ordering, short-circuiting and empty-list semantics.
- Validate the Valid/Invalid result type and type tags.

Conventions
- Test method names follow CamelCase per project convention.
- Failures are inspected through their structured payload, not their wording,
  except where the wording itself is the contract.
"""
import unittest
from unittest import TestCase

from covenant import (
    FaultCode,
    Invalid,
    Tag,
    Valid,
    ValidationFailure,
    all_of,
    always_valid,
    any_of,
    contains,
    contains_all,
    contains_only,
    equals,
    every,
    key,
    keys,
    member_of,
    optional_key,
    optional_keys,
    predicate,
    tagof,
    type_of,
    validate,
)


class TestCore(TestCase):
    """Behavioral tests for the primitive validators and combinators."""

    def testEqualsReturnsInput(self):
        value = [1, 2]
        self.assertIs(equals([1, 2])(value), value)

    def testEqualsFailurePayload(self):
        with self.assertRaises(ValidationFailure) as context:
            equals(0)(1)
        self.assertEqual(context.exception.code, FaultCode.NOT_EQUAL)
        self.assertEqual(dict(context.exception.payload), {"expected": 0, "actual": 1})
        self.assertEqual(str(context.exception), "Expected 0 but got 1")

    def testValidationFailureIsValueError(self):
        with self.assertRaises(ValueError):
            equals("a")("b")

    def testMemberOfAcrossContainers(self):
        self.assertEqual(member_of({"a": 1})("a"), "a")
        self.assertEqual(member_of({1, 2})(2), 2)
        self.assertEqual(member_of([3, 4])(4), 4)

    def testMemberOfFailurePayload(self):
        with self.assertRaises(ValidationFailure) as context:
            member_of(("x", "y"))("z")
        self.assertEqual(context.exception.code, FaultCode.NOT_A_MEMBER)
        self.assertEqual(dict(context.exception.payload), {"container": ("x", "y"), "element": "z"})

    def testMemberOfUnhashableIsAFailure(self):
        with self.assertRaises(ValidationFailure):
            member_of({1, 2})([1])

    def testMemberOfIteratorIsReusable(self):
        validator = member_of(iter(("acc", "prop")))
        self.assertEqual(validator("prop"), "prop")
        self.assertEqual(validator("acc"), "acc")
        self.assertEqual(validator("prop"), "prop")
        with self.assertRaises(ValidationFailure) as context:
            validator("other")
        self.assertEqual(context.exception.payload["container"], ("acc", "prop"))

    def testTypeOf(self):
        self.assertEqual(type_of(Tag.STRING)("text"), "text")
        self.assertEqual(type_of("integer")(3), 3)
        with self.assertRaises(ValidationFailure) as context:
            type_of(Tag.INTEGER)(True)
        self.assertEqual(context.exception.code, FaultCode.WRONG_TYPE)
        self.assertEqual(context.exception.payload["value"], True)
        self.assertEqual(context.exception.payload["expected_type"], Tag.INTEGER)

    def testTypeOfRejectsNonTag(self):
        with self.assertRaises(TypeError):
            type_of(int)

    def testTagOf(self):
        self.assertEqual(tagof(None), Tag.NULL)
        self.assertEqual(tagof(False), Tag.BOOLEAN)
        self.assertEqual(tagof(1), Tag.INTEGER)
        self.assertEqual(tagof(1.5), Tag.FLOAT)
        self.assertEqual(tagof(""), Tag.STRING)
        self.assertEqual(tagof(b""), Tag.BYTES)
        self.assertEqual(tagof((1,)), Tag.LIST)
        self.assertEqual(tagof({}), Tag.DICT)
        self.assertEqual(tagof(frozenset()), Tag.SET)
        self.assertEqual(tagof(len), Tag.PROCEDURE)
        self.assertEqual(tagof(object()), "object")

    def testPredicateHidesValue(self):
        with self.assertRaises(ValidationFailure) as context:
            predicate("positive", lambda number: number > 0)(-5)
        self.assertEqual(context.exception.code, FaultCode.PREDICATE_FAILED)
        self.assertEqual(dict(context.exception.payload), {"name": "positive"})
        self.assertNotIn("-5", str(context.exception))

    def testAllOfEmptyAcceptsEverything(self):
        for value in (None, 0, "x", {"a": 1}):
            self.assertIs(all_of([])(value), value)

    def testAllOfPropagatesFirstFailureVerbatim(self):
        calls = []

        def spy(value):
            calls.append(value)
            return value

        with self.assertRaises(ValidationFailure) as context:
            all_of([equals(1), spy, equals(2)])(3)
        self.assertEqual(context.exception.payload["expected"], 1)
        self.assertEqual(calls, [])

    def testAllOfEvaluatesLeftToRight(self):
        calls = []

        def recorder(label):
            def check(value):
                calls.append(label)
                return value
            return check

        all_of([recorder("a"), recorder("b"), recorder("c")])(0)
        self.assertEqual(calls, ["a", "b", "c"])

    def testAnyOfEmptyAlwaysFails(self):
        for value in (None, 0, "x"):
            with self.assertRaises(ValidationFailure) as context:
                any_of([])(value)
            self.assertEqual(context.exception.code, FaultCode.NO_ALTERNATIVE)
            self.assertEqual(dict(context.exception.payload), {})

    def testAnyOfFirstSuccessWins(self):
        calls = []

        def spy(value):
            calls.append(value)
            return value

        self.assertEqual(any_of([equals(1), equals(2), spy])(2), 2)
        self.assertEqual(calls, [])

    def testAnyOfExhaustionIsGeneric(self):
        with self.assertRaises(ValidationFailure) as context:
            any_of([equals(1), type_of(Tag.STRING)])(2)
        self.assertEqual(context.exception.code, FaultCode.NO_ALTERNATIVE)
        self.assertEqual(str(context.exception), "Value did not match any alternative")

    def testAlwaysValid(self):
        value = object()
        self.assertIs(always_valid(value), value)

    def testCombinatorsRejectNonCallables(self):
        with self.assertRaises(TypeError):
            all_of([equals(1), "nope"])
        with self.assertRaises(TypeError):
            any_of([None])

    def testValidatorsHaveReadableNames(self):
        self.assertEqual(equals(0).__name__, "equals")
        self.assertEqual(key("a", always_valid).__name__, "key")
        self.assertEqual(keys({}).__name__, "keys")
        self.assertEqual(always_valid.__name__, "always_valid")


class TestResults(TestCase):
    """Behavioral tests for validate() and the Valid/Invalid result type."""

    def testValid(self):
        result = validate(equals(1), 1)
        self.assertEqual(result, Valid(1))
        self.assertTrue(result)

    def testInvalid(self):
        result = validate(equals(1), 2)
        self.assertIsInstance(result, Invalid)
        self.assertFalse(result)
        self.assertEqual(result.failure.payload["actual"], 2)

    def testPatternMatching(self):
        match validate(type_of(Tag.STRING), 5):
            case Valid(value):
                self.fail("unexpected success with %r" % value)
            case Invalid(failure):
                self.assertEqual(failure.code, FaultCode.WRONG_TYPE)

    def testOtherExceptionsPropagate(self):
        def broken(value):
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            validate(broken, 1)


class TestStructural(TestCase):
    """Behavioral tests for the mapping and sequence combinators."""

    def testContains(self):
        document = {"a": 1}
        self.assertIs(contains("a")(document), document)
        with self.assertRaises(ValidationFailure) as context:
            contains("b")(document)
        self.assertEqual(context.exception.code, FaultCode.MISSING_ELEMENT)
        self.assertEqual(context.exception.payload["element"], "b")
        self.assertEqual(context.exception.payload["container"], document)

    def testContainsOnNonContainerIsAFailure(self):
        with self.assertRaises(ValidationFailure):
            contains("a")(42)

    def testOptionalKeyAbsenceSucceeds(self):
        document = {"b": 2}
        self.assertIs(optional_key("a", equals(1))(document), document)

    def testOptionalKeyValidatesPresentValue(self):
        with self.assertRaises(ValidationFailure) as context:
            optional_key("a", equals(1))({"a": 2})
        self.assertEqual(context.exception.payload["actual"], 2)

    def testKeyMissingReportsElement(self):
        with self.assertRaises(ValidationFailure) as context:
            key("a", equals(1))({"b": 1})
        self.assertEqual(context.exception.payload["element"], "a")

    def testKeyInvalidReportsValueFailure(self):
        with self.assertRaises(ValidationFailure) as context:
            key("a", equals(1))({"a": 2})
        self.assertEqual(context.exception.payload["expected"], 1)

    def testKeyReturnsOriginalMapping(self):
        document = {"a": 1}
        self.assertIs(key("a", equals(1))(document), document)

    def testOptionalKeysRequiresMapping(self):
        with self.assertRaises(ValidationFailure) as context:
            optional_keys({"a": always_valid})(["a"])
        self.assertEqual(context.exception.code, FaultCode.NOT_A_MAPPING)
        self.assertEqual(context.exception.payload["value"], ["a"])

    def testOptionalKeysChecksOnlyPresentKeys(self):
        document = {"a": 1}
        self.assertIs(optional_keys({"a": equals(1), "b": equals(2)})(document), document)

    def testContainsAllReportsFirstMissing(self):
        with self.assertRaises(ValidationFailure) as context:
            contains_all(["a", "b", "c"])({"a": 1})
        self.assertEqual(context.exception.payload["element"], "b")

    def testContainsOnly(self):
        self.assertEqual(contains_only([0, 1])({0: 0}), {0: 0})
        with self.assertRaises(ValidationFailure) as context:
            contains_only([0, 1])({0: 0, 2: 2})
        self.assertEqual(context.exception.code, FaultCode.UNEXPECTED_KEYS)
        self.assertEqual(context.exception.payload["allowed_keys"], [0, 1])
        self.assertEqual(context.exception.payload["dict"], {0: 0, 2: 2})

    def testContainsOnlyRejectsNonMapping(self):
        with self.assertRaises(ValidationFailure):
            contains_only([0])([0])

    def testKeysFullShape(self):
        document = {"a": 1, "b": "x"}
        self.assertIs(keys({"a": equals(1), "b": type_of(Tag.STRING)})(document), document)

    def testKeysPresenceTakesPriority(self):
        with self.assertRaises(ValidationFailure) as context:
            keys({"a": equals(1), "b": equals(2)})({"a": 5})
        self.assertEqual(context.exception.code, FaultCode.MISSING_ELEMENT)
        self.assertEqual(context.exception.payload["element"], "b")

    def testKeysNested(self):
        shape = keys({"user": keys({"name": type_of(Tag.STRING)})})
        with self.assertRaises(ValidationFailure) as context:
            shape({"user": {"name": 7}})
        self.assertEqual(context.exception.code, FaultCode.WRONG_TYPE)

    def testEvery(self):
        self.assertEqual(every(equals(0))([0, 0, 0]), [0, 0, 0])
        self.assertEqual(every(equals(0))((0, 0)), (0, 0))
        self.assertEqual(every(equals(0))([]), [])

    def testEveryPropagatesFirstFailure(self):
        with self.assertRaises(ValidationFailure) as context:
            every(equals(0))([0, 1, 2])
        self.assertEqual(context.exception.payload["actual"], 1)

    def testEveryRejectsNonSequences(self):
        for value in ("000", {0: 0}, 0):
            with self.assertRaises(ValidationFailure) as context:
                every(equals(0))(value)
            self.assertEqual(context.exception.code, FaultCode.NOT_A_SEQUENCE)

    def testValidatorsDoNotMutate(self):
        document = {"a": [1, 2], "b": {"c": 3}}
        snapshot = {"a": [1, 2], "b": {"c": 3}}
        keys({"a": every(type_of(Tag.INTEGER)), "b": contains_only(["c"])})(document)
        self.assertEqual(document, snapshot)


if __name__ == "__main__":
    unittest.main()
