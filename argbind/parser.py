"""
Argbind parser: register typed options, then bind an argv to them.

What this module provides
- Parser: owns a Registry and exposes
  • flag(...) / option(...): registration (see argbind.registry).
  • parse(argv, handler, policy=...): the tokenizer/dispatcher.
  • invokename: token 0 of the last parsed vector.
  • gethelp(...) / printhelp(...): help text over the registered entries.

Token grammar
- long form:  --key | --key=value
- short form: -abc (chained flags) | -k | -k=value
- detached value: without "=value", the next token is taken whole as the value.
- anything else (including "" and "-") is a malformed token.

Quick start
    from argbind import Parser, Bool, Int32, String, Optional, Unset

    speedy, cakes, name, required = Bool(), Int32(), String("cakeman"), Optional(Int32)

    parser = Parser()
    parser.flag(speedy, "s", "enable-speedy-mode", "go fast")
    parser.option(cakes, "n", "num-cakes", "the number of cakes")
    parser.option(name, Unset, "cake-name", "name your cake")
    parser.option(required, "r", "required", "this one is mandatory")

    if not parser.parse(sys.argv):
        parser.printhelp("my cake program")

Fault protocol
- every problem becomes a ParseError handed to the handler in token order.
- any fault makes parse() return False; the handler decides whether the scan
  continues (None / ErrorResult.CONTINUE) or stops (ErrorResult.TERMINATE).
- a missing detached value always stops the scan.
"""
import copy
import difflib
import shlex
import sys

from rich.console import Console

from .coercion import CoercionError, TRUE_STRINGS, FALSE_STRINGS
from .faults import *
from .helptext import HelpText
from .registry import Registry, CHAR_DELIMITER, WORD_DELIMITER, VALUE_DELIMITER
from .storage import Kind
from .utils import Unset, nullify, ordinal


def _split(text):
    """
    split "key=value" at the first delimiter.

    returns (key, value) where value is Unset when no delimiter is present and
    may be the empty string ("key=").
    """
    key, delimiter, value = text.partition(VALUE_DELIMITER)
    return key, value if delimiter else Unset


def _expectation(cell):
    """
    describe what a cell accepts, for hints.
    """
    kind = (cell.type if cell.kind is Kind.OPTIONAL else type(cell)).__kind__
    match kind:
        case Kind.BOOL:
            return "expected one of %s" % ", ".join(TRUE_STRINGS + FALSE_STRINGS)
        case Kind.SIGNED:
            return "expected a decimal or hexadecimal (0x/-0x) integer"
        case Kind.UNSIGNED:
            return "expected a non-negative decimal or hexadecimal (0x) integer"
        case Kind.CHAR:
            return "expected exactly one character"
        case Kind.FLOAT:
            return "expected a decimal or hexadecimal floating point number"
    return "check the value format"


class Parser:
    """
    Command-line argument parser binding tokens to caller-owned cells.

    parameters
    - colorful: bool
      style rendered faults and help with the rich palette.
    - fancy: bool
      render faults inside a rich Panel.

    notes
    - a parser is not re-entrant: calling parse() from one of its own
      handlers raises RuntimeError.
    """
    __slots__ = (
        "_registry",
        "_invokename",
        "_colorful",
        "_fancy",
        "_tokens",
        "_index",
        "_handler",
        "_policy",
        "_success",
    )

    def __init__(self, *, colorful=True, fancy=False):
        if not isinstance(colorful, bool) or not isinstance(fancy, bool):
            raise TypeError("colorful and fancy must be bools")
        self._registry = Registry()
        self._invokename = Unset
        self._colorful = colorful
        self._fancy = fancy
        self._tokens = ()
        self._index = 0
        self._handler = Unset
        self._policy = Policy.IGNORE
        self._success = True

    @property
    def registry(self):
        return self._registry

    @property
    def colorful(self):
        return self._colorful

    @property
    def fancy(self):
        return self._fancy

    @property
    def invokename(self):
        """
        the invocation name (token 0) captured by the last parse call.
        """
        if self._invokename is Unset:
            raise RuntimeError("invocation name is not available before parsing")
        return self._invokename

    def flag(self, cell, char=Unset, word=Unset, description="", /, *, default=False, unique=True):
        return self._registry.addflag(cell, char, word, description, default=default, unique=unique)

    def option(self, cell, char=Unset, word=Unset, description="", /, *, unique=True):
        return self._registry.addoption(cell, char, word, description, unique=unique)

    def gethelp(self, description="", /):
        return str(HelpText(self._registry, description))

    def printhelp(self, description="", /, *, console=Unset):
        """
        render the help text through rich (stdout unless a console is given).
        """
        nullify(console, Console()).print(HelpText(self._registry, description, colorful=self._colorful))

    def parse(self, argv=Unset, handler=Unset, /, *, policy=Policy.IGNORE):
        """
        bind an argument vector to the registered entries.

        parameters
        - argv: Sequence[str] | str
          tokens where token 0 is the invocation path; a string is split the
          way a POSIX shell would (shlex). defaults to sys.argv.
        - handler: Callable[[ParseError], ErrorResult | None]
          receives every fault in token order. defaults to report().
        - policy: Policy
          IGNORE skips unknown keys silently; ERROR reports them.

        returns
        - bool: True when no fault occurred.

        errors
        - ValueError for an empty vector, TypeError for non-string tokens or a
          bad handler result, RuntimeError on re-entrant use.
        """
        if argv is Unset:
            argv = sys.argv
        elif isinstance(argv, str):
            argv = shlex.split(argv)
        tokens = tuple(argv)
        if not tokens:
            raise ValueError("argument vector must hold at least the invocation name")
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("argument vector must contain only strings")
        if not isinstance(policy, Policy):
            raise TypeError("policy must be a Policy, not %r" % type(policy).__name__)
        handler = nullify(handler, report)
        if not callable(handler):
            raise TypeError("error handler must be callable")

        with self._registry.frozen():
            self._tokens = tokens
            self._handler = handler
            self._policy = policy
            try:
                return self._parseargs()
            finally:
                self._tokens = ()
                self._handler = Unset

    def _trigger(self, fault):
        """
        hand a fault to the handler; return True when scanning continues.
        """
        self._success = False
        fault = copy.replace(fault, prog=self._invokename, colorful=self._colorful, fancy=self._fancy)
        result = self._handler(fault)
        if fault.fatal:
            return False
        if result is None:
            return True
        if not isinstance(result, ErrorResult):
            raise TypeError("error handler must return None or an ErrorResult, not %r" % type(result).__name__)
        return result is ErrorResult.CONTINUE

    def _suggest(self, key, *, char):
        if char:
            return []
        words = [entry.word for entry in self._registry.options if entry.word is not Unset]
        return difflib.get_close_matches(key, words, 3)

    def _next(self, token, start):
        """
        take the token after the current one as a detached value.

        returns Unset (after reporting the fatal fault) when the vector ends.
        """
        self._index += 1
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        self._trigger(MissingParameterError(
            "unexpected termination, expected parameter for command %r at %s position" % (token, ordinal(start)),
            title="missing parameter",
            code=FaultCode.MISSING_PARAMETER,
            hint="pass a value after %r (for example: %s <value> or %s=<value>)" % (token, token, token),
            token=token,
            index=start,
            fatal=True,
            docs=getdoc(FaultCode.MISSING_PARAMETER)
        ))
        return Unset

    def _set(self, option, key, value, token, start, *, char):
        """
        resolve `option` (Unset when unknown) and coerce `value` into it.
        """
        if option is Unset:
            if self._policy is not Policy.ERROR:
                return True
            suggestions = self._suggest(key, char=char)
            try:
                hint = "did you mean %r?" % (WORD_DELIMITER + suggestions[0])
            except IndexError:
                hint = "check the spelling against the registered keys"
            return self._trigger(UnknownCommandError(
                "unrecognized command %r at %s position" % (key, ordinal(start)),
                title="unrecognized command",
                code=FaultCode.UNKNOWN_COMMAND,
                hint=hint,
                token=token,
                index=start,
                key=key,
                suggestions=suggestions,
                docs=getdoc(FaultCode.UNKNOWN_COMMAND)
            ))

        try:
            option.set(value)
        except CoercionError as error:
            return self._trigger(UncastableParameterError(
                "unexpected format for argument %r with parameter %r at %s position" % (key, value, ordinal(start)),
                title="unexpected parameter format",
                code=FaultCode.UNCASTABLE_PARAMETER,
                hint=_expectation(option.cell),
                token=token,
                index=start,
                key=key,
                value=value,
                argument=option,
                reason=str(error),
                docs=getdoc(FaultCode.UNCASTABLE_PARAMETER)
            ))
        return True

    def _parse_word(self, token, start):
        key, value = _split(token[len(WORD_DELIMITER):])
        if value is Unset:
            if (flag := self._registry.findflag(word=key)) is not Unset:
                flag.set()
                return True
            if (value := self._next(token, start)) is Unset:
                return False
        return self._set(self._registry.findoption(word=key), key, value, token, start, char=False)

    def _parse_char(self, token, start):
        # chained flags first: -abc sets a, b and c
        matched = False
        for char in token[len(CHAR_DELIMITER):]:
            if (flag := self._registry.findflag(char=char)) is Unset:
                if matched and self._policy is Policy.ERROR and not self._trigger(UnknownFlagError(
                        "unrecognized flag %r in %r at %s position" % (char, token, ordinal(start)),
                        title="unrecognized flag",
                        code=FaultCode.UNKNOWN_FLAG,
                        hint="remove %r from the chain or split the token" % char,
                        token=token,
                        index=start,
                        key=char,
                        docs=getdoc(FaultCode.UNKNOWN_FLAG)
                )):
                    return False
                break
            flag.set()
            matched = True
        if matched:
            return True

        # otherwise a single character option: -k value | -k=value
        key, value = _split(token[len(CHAR_DELIMITER):])
        if value is Unset and (value := self._next(token, start)) is Unset:
            return False
        if len(key) != 1:
            return self._trigger(UnexpectedFormatError(
                "command %r at %s position has an unexpected format" % (token, ordinal(start)),
                title="unexpected command format",
                code=FaultCode.UNEXPECTED_FORMAT,
                hint="a single dash takes one character key (for example: -k=value); use %r for word keys" % WORD_DELIMITER,
                token=token,
                index=start,
                key=key,
                value=value,
                docs=getdoc(FaultCode.UNEXPECTED_FORMAT)
            ))
        return self._set(self._registry.findoption(char=key), key, value, token, start, char=True)

    def _parseargs(self):
        """
        scan self._tokens left to right; token 0 is the invocation name.

        self._index always points at the token being classified; detached
        values advance it past the value they consume.
        """
        self._invokename = self._tokens[0]
        self._success = True
        self._index = 1

        while self._index < len(self._tokens):
            token = self._tokens[start := self._index]

            if len(token) > len(WORD_DELIMITER) and token.startswith(WORD_DELIMITER):
                proceed = self._parse_word(token, start)
            elif len(token) > len(CHAR_DELIMITER) and token.startswith(CHAR_DELIMITER):
                proceed = self._parse_char(token, start)
            else:
                proceed = self._trigger(MalformedTokenError(
                    "unrecognized command format %r at %s position" % (token, ordinal(start)),
                    title="unrecognized command format",
                    code=FaultCode.MALFORMED_TOKEN,
                    hint="options look like -k, -k=value, --name or --name=value",
                    token=token,
                    index=start,
                    docs=getdoc(FaultCode.MALFORMED_TOKEN)
                ))

            if not proceed:
                return False
            self._index += 1

        return self._success


__all__ = (
    "Parser",
)
