"""
Covenant domain validators.

Composed validators for common payload fields:
- uuid: textual UUID (8-4-4-4-12 hexadecimal groups).
- timestamp: ISO-8601 UTC timestamp, "YYYY-MM-DDTHH:MM:SS[.fff]Z".
- string_of_max_length(n): strings strictly shorter than n characters.
- signed(verify, is_public_key): signed envelopes {"author", "signature", ...}.

Signing collaborators
- verify(author, signature, payload) -> bool and is_public_key(author) -> bool are
  supplied by the caller; this module only decides *what* bytes are verified.
- canonicalize(mapping) is that payload: compact, key-sorted JSON in UTF-8, so the
  bytes verified are identical to the bytes produced by seal() at creation time.
"""
import json
import re
from datetime import datetime, timezone

from .utils import rename
from .validators import Tag, all_of, keys, predicate, type_of

_UUID = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
_TIMESTAMP = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.[0-9]+)?Z")

# keys excluded from the signed payload
ENVELOPE = ("author", "signature")


def is_uuid(text, /):
    return _UUID.fullmatch(text) is not None


def is_timestamp(text, /):
    if not (match := _TIMESTAMP.fullmatch(text)):
        return False
    try:
        datetime(*map(int, match.groups()), tzinfo=timezone.utc)
    except ValueError:  # e.g. 2024-02-30
        return False
    return True


uuid = rename(all_of((type_of(Tag.STRING), predicate("valid UUID", is_uuid))), "uuid")

timestamp = rename(all_of((type_of(Tag.STRING), predicate("valid timestamp", is_timestamp))), "timestamp")


def string_of_max_length(limit, /):
    """
    accept strings whose length is strictly less than `limit`.
    """
    if not isinstance(limit, int) or isinstance(limit, bool):
        raise TypeError("string_of_max_length() argument must be an integer")
    return rename(all_of((
        type_of(Tag.STRING),
        predicate("< %d chars" % limit, lambda text: len(text) < limit),
    )), "string_of_max_length")


def canonicalize(document, /):
    """
    deterministic serialization of a mapping: sorted keys, no whitespace, UTF-8.

    raises TypeError/ValueError for values JSON cannot represent.
    """
    return json.dumps(dict(document), sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _unsigned(document):
    return {name: value for name, value in document.items() if name not in ENVELOPE}


def seal(document, author, sign, /):
    """
    build a signed envelope for `document`.

    sign(payload) receives canonicalize(document without author/signature) and
    returns the signature; the result is a new mapping with both fields set.
    """
    return {**_unsigned(document), "author": author, "signature": sign(canonicalize(_unsigned(document)))}


def signed(verify, is_public_key, /):
    """
    validator for signed envelopes.

    steps
    - "author" must be present and satisfy is_public_key (keys(...) failure otherwise).
    - verify(author, signature, canonicalize(document without author/signature))
      must be truthy; a document that cannot be canonicalized is not validly signed.
    """
    if not callable(verify) or not callable(is_public_key):
        raise TypeError("signed() arguments must be callables")

    def check(document):
        try:
            payload = canonicalize(_unsigned(document))
        except (TypeError, ValueError):
            return False
        return verify(document["author"], document.get("signature"), payload)

    return rename(all_of((
        keys({"author": predicate("valid public key", is_public_key)}),
        predicate("valid signature", check),
    )), "signed")


__all__ = (
    "ENVELOPE",
    "is_uuid",
    "is_timestamp",
    "uuid",
    "timestamp",
    "string_of_max_length",
    "canonicalize",
    "seal",
    "signed",
)
