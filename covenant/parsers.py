"""
Covenant command layer: match token sequences against declared commands.

What this module provides
- options(command, specs, help): a matcher for `command [OPTION...]`, where the
  options are Flag/MultiOption specs. Produces Found({key: ParsedOptions}).
- cmd0 / cmd1 / cmd2 (and the general positional()): matchers for a command name
  followed by exactly zero, one or two positional arguments, bound by name.
- invoke(matchers, prompt): try matchers in order, report unknown commands.

Matcher contract
- matcher(tokens) -> Found(bindings) | absent
  • absent: the first token is not this matcher's command (or there are no
    tokens at all). Not an error: callers try the next candidate.
  • Found: the command matched and every remaining token was accounted for.
  • otherwise a ParseFailure is triggered immediately; no partial mapping is
    ever returned.

Runtime options (explicit, per matcher)
- mode: FailureMode.LIVE (render + exit 1) or FailureMode.STUB (raise).
- fancy: render failures inside a panel.
- colorful: styled output.

Quick start
    from covenant import Flag, MultiOption, FailureMode, cmd1, invoke, options

    HELP = "usage: tool list [--state acc|prop] [--fancy] | tool show ID"
    matchers = (
        options("list", (
            MultiOption("state", "-s", "--state", choices=("acc", "prop")),
            Flag("fancy", "--fancy"),
        ), HELP),
        cmd1("show", "id", HELP),
    )

    outcome = invoke(matchers, "list --state acc", help=HELP)
    outcome.bindings  # {'options': {'state': ('acc',), 'fancy': False}}
"""
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable
from types import MappingProxyType

from rich.text import Text

from .faults import FailureMode, FaultCode, ParseFailure, getdoc, trigger
from .messages import listing, render
from .specs import Kind, OptionSpec
from .outcomes import Found, absent
from .utils import Unset, rename
from .validators import Tag, all_of, any_of, every, member_of, predicate, type_of

logger = logging.getLogger(__name__)

_command = type_of(Tag.STRING)
_identifier = all_of((type_of(Tag.STRING), predicate("bindable identifier", str.isidentifier)))
_specs = every(predicate("option spec", lambda spec: isinstance(spec, OptionSpec)))
_help = any_of((type_of(Tag.STRING), predicate("rich text", lambda help: isinstance(help, Text))))
_mode = member_of(tuple(FailureMode))
_switch = type_of(Tag.BOOLEAN)


class _Runtime:
    """
    per-matcher failure reporting: help text plus the runtime options.
    """
    __slots__ = ("prog", "help", "mode", "fancy", "colorful")

    def __init__(self, prog, help, mode, fancy, colorful):
        _help(help)
        _mode(mode)
        _switch(fancy)
        _switch(colorful)
        self.prog = prog
        self.help = help
        self.mode = mode
        self.fancy = fancy
        self.colorful = colorful

    def fail(self, code, /, *, title, hint=None, **context):
        """
        build and trigger a ParseFailure; never returns normally.

        LIVE mode exits the process, STUB mode raises the failure.
        """
        logger.debug("%s: triggering %s (%s mode)", self.prog, code.name, self.mode.value)
        trigger(
            ParseFailure(render(code, **context), code=code, title=title, hint=hint, docs=getdoc(code), **context),
            prog=self.prog,
            help=self.help,
            mode=self.mode,
            fancy=self.fancy,
            colorful=self.colorful,
        )


def _lookup(specs, token):
    # declaration order; first spec naming the token wins
    for spec in specs:
        if spec.matches(token):
            return spec
    return None


def _suggest(token, candidates):
    suggestions = difflib.get_close_matches(token, candidates, 1)
    return "did you mean %r?" % suggestions[0] if suggestions else None


def _parse(specs, tokens, runtime):
    """
    consume option tokens left to right and return the parsed mapping.

    - flags record True and never consume the following token.
    - multi-options consume exactly the following token, which must be one of
      their choices. A following token that is not a choice and looks like an
      option ("-...") is reported as a missing argument, anything else as an
      invalid argument.
    - repeated multi-options keep their values in order of appearance, followed
      by the elements of the declared default.
    """
    seen = {spec.key: [] for spec in specs if spec.kind is Kind.MULTI}
    flagged = set()
    index = 0

    while index < len(tokens):
        token = tokens[index]
        spec = _lookup(specs, token)

        if spec is None:
            runtime.fail(
                FaultCode.INVALID_OPTION,
                title="invalid option",
                hint=_suggest(token, [name for spec in specs for name in spec.names]),
                option=token,
            )

        if spec.kind is Kind.FLAG:
            flagged.add(spec.key)
            index += 1
            continue

        try:
            value = tokens[index + 1]
        except IndexError:
            value = None

        if value is None or (not spec.accepts(value) and value.startswith("-")):
            runtime.fail(
                FaultCode.MISSING_OPTION_ARGUMENT,
                title="missing argument",
                hint="%s expects one of: %s" % (token, listing(spec.choices)),
                key=spec.key,
                option=token,
            )
        if not spec.accepts(value):
            runtime.fail(
                FaultCode.INVALID_OPTION_ARGUMENT,
                title="invalid argument",
                hint=_suggest(value, spec.choices),
                value=value,
                key=spec.key,
                option=token,
                choices=listing(spec.choices),
            )

        logger.debug("%s: option %r consumed %r", runtime.prog, spec.key, value)
        seen[spec.key].append(value)
        index += 2

    parsed = {}
    for spec in specs:
        if spec.kind is Kind.FLAG:
            parsed.setdefault(spec.key, True if spec.key in flagged else spec.default)
        else:
            parsed.setdefault(spec.key, (*seen[spec.key], *spec.default))
    return MappingProxyType(parsed)


def options(command, specs, help, /, *, key="options", mode=FailureMode.LIVE, fancy=False, colorful=True):
    """
    build a matcher for `command` followed by any number of declared options.

    parameters
    - command: str, the literal command name (first token).
    - specs: Iterable[OptionSpec], scanned in declaration order.
    - help: str | Text, shown with every failure.
    - key: identifier under which the ParsedOptions mapping is bound.

    returns
    - matcher(tokens) -> Found({key: ParsedOptions}) | absent

    examples
    - ["list"]                               → {"options": {"state": (), "fancy": False}}
    - ["list", "--state", "prop", "-s", "acc"] → {"options": {"state": ("prop", "acc"), ...}}
    - ["list", "--state"]                    → ParseFailure (missing argument for option ":state")
    """
    _command(command)
    _specs(specs := tuple(specs))
    _identifier(key)
    runtime = _Runtime(command, help, mode, fancy, colorful)

    @rename("options")
    def matcher(tokens, /):
        tokens = tuple(tokens)
        if not tokens or tokens[0] != command:
            return absent
        logger.debug("%s: parsing %d option token(s)", command, len(tokens) - 1)
        return Found({key: _parse(specs, tokens[1:], runtime)})

    matcher.command = command
    return matcher


def positional(command, /, *patterns, help, mode=FailureMode.LIVE, fancy=False, colorful=True):
    """
    build a matcher for `command` followed by exactly len(patterns) arguments.

    - exact arity: Found({pattern: token, ...}).
    - fewer tokens: MISSING_ARGUMENT naming the first unbound pattern.
    - more tokens: TOO_MANY_ARGUMENTS.
    - another command: absent.
    """
    _command(command)
    for pattern in patterns:
        _identifier(pattern)
    if len(set(patterns)) != len(patterns):
        raise ValueError("positional() patterns cannot contain duplicates")
    runtime = _Runtime(command, help, mode, fancy, colorful)

    @rename("positional")
    def matcher(tokens, /):
        tokens = tuple(tokens)
        if not tokens or tokens[0] != command:
            return absent
        arguments = tokens[1:]
        if len(arguments) < len(patterns):
            runtime.fail(
                FaultCode.MISSING_ARGUMENT,
                title="missing argument",
                hint="usage: %s" % " ".join((command, *map(str.upper, patterns))),
                name=patterns[len(arguments)],
                command=command,
            )
        if len(arguments) > len(patterns):
            runtime.fail(
                FaultCode.TOO_MANY_ARGUMENTS,
                title="too many arguments",
                hint="%s takes %d argument(s) but %d were given" % (command, len(patterns), len(arguments)),
                command=command,
                extra=arguments[len(patterns):],
            )
        logger.debug("%s: bound %s", command, ", ".join(patterns) or "no arguments")
        return Found(zip(patterns, arguments))

    matcher.command = command
    return matcher


def cmd0(command, help, /, **runtime):
    return rename(positional(command, help=help, **runtime), "cmd0")


def cmd1(command, argument, help, /, **runtime):
    return rename(positional(command, argument, help=help, **runtime), "cmd1")


def cmd2(command, first, second, help, /, **runtime):
    return rename(positional(command, first, second, help=help, **runtime), "cmd2")


def _tokenize(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("invoke() prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("invoke() prompt must be a string or an iterable of strings")


def invoke(matchers, prompt=Unset, /, *, help="", mode=FailureMode.LIVE, fancy=False, colorful=True):
    """
    run matchers against a prompt and return the first Found outcome.

    prompt
    - Unset: sys.argv[1:].
    - str: shell-like string, split with shlex.split.
    - Iterable[str]: pre-tokenized sequence.

    behavior
    - matchers are tried in order; the first Found wins. Failures raised by a
      matcher (its command matched but its arguments did not) are final.
    - empty prompt: MISSING_COMMAND. No matcher applies: UNKNOWN_COMMAND with a
      close-match suggestion.
    """
    matchers = tuple(matchers)
    tokens = _tokenize(prompt)
    runtime = _Runtime(None, help, mode, fancy, colorful)
    commands = [matcher.command for matcher in matchers if isinstance(getattr(matcher, "command", None), str)]

    for matcher in matchers:
        if outcome := matcher(tokens):
            return outcome

    if not tokens:
        runtime.fail(
            FaultCode.MISSING_COMMAND,
            title="missing command",
            hint="available commands: %s" % listing(commands) if commands else None,
        )
    runtime.fail(
        FaultCode.UNKNOWN_COMMAND,
        title="unknown command",
        hint=_suggest(tokens[0], commands) or ("available commands: %s" % listing(commands) if commands else None),
        command=tokens[0],
    )


__all__ = (
    "options",
    "positional",
    "cmd0",
    "cmd1",
    "cmd2",
    "invoke",
)
