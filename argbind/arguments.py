r"""
Argbind registry entries.

Overview
- Flag: presence-only switch bound to a Bool cell. Triggering it writes the
  negation of its default (so "opt-out" flags default to True and are cleared).
- Option: value-bearing argument bound to any cell. Setting it coerces one
  token with the rule matching the cell's Kind and writes the cell.

Both entries carry
- char: Unset | str (one character, used as -c)
- word: Unset | str (used as --word)
- descr: str (help text)
- cell: the caller-owned storage cell
- display: default-value text captured at registration (for help output)

Entries are built by argbind.registry.Registry; they are read-only once built.
"""
import functools
import operator
import re

from .coercion import parsebool, parseint, parsechar, parsefloat, parsestring
from .storage import Kind
from .utils import Unset, rename


def mirror(name):
    """
    build a read-only property over the private slot '_' + name.
    """

    @rename(name)
    def getter(self):
        return getattr(self, "_" + name)

    return property(getter)


class ArgumentType(type):
    """
    Metaclass providing introspection for registry entries.

    - exposes every name in __introspectable__ as a read-only property.
    - derives __typename__ from the class name ("Flag" → "flag").
    - provides stable __repr__/__rich_repr__ implementations.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def coerce(type, token, /):
    """
    convert one token for a concrete (non-optional) cell type.

    this is the single dispatch point between storage kinds and coercion
    rules; every rule raises CoercionError on failure.
    """
    match type.__kind__:
        case Kind.BOOL:
            return parsebool(token)
        case Kind.SIGNED | Kind.UNSIGNED:
            return parseint(token, type.low, type.high, signed=type.signed)
        case Kind.CHAR:
            return parsechar(token)
        case Kind.FLOAT:
            return parsefloat(token, single=type.single)
        case Kind.STRING:
            return parsestring(token)
        case _:
            raise TypeError("cannot coerce into %r" % type.__name__)


class Argument(metaclass=ArgumentType):
    __slots__ = ("_char", "_word", "_descr", "_cell", "_display")

    __introspectable__ = ("char", "word", "descr", "cell", "display")

    def __init__(self, cell, char, word, descr, display):
        self._cell = cell
        self._char = char
        self._word = word
        self._descr = descr
        self._display = display

    @property
    def keys(self):
        """
        the spellings accepted on the command line, short first.
        """
        keys = []
        if self._char is not Unset:
            keys.append("-" + self._char)
        if self._word is not Unset:
            keys.append("--" + self._word)
        return tuple(keys)

    def haschar(self, char, /):
        return self._char is not Unset and self._char == char

    def hasword(self, word, /):
        return self._word is not Unset and self._word == word

    def set(self, token, /):
        raise NotImplementedError


class Flag(Argument):
    __slots__ = ("_default",)

    __introspectable__ = ("char", "word", "descr", "cell", "display", "default")

    def __init__(self, cell, char, word, descr, default):
        super().__init__(cell, char, word, descr, cell.describe(default))
        self._default = default

    def set(self, token=Unset, /):
        """
        trigger the flag; any token is ignored.
        """
        self._cell.value = not self._default


class Option(Argument):
    __slots__ = ()

    def __init__(self, cell, char, word, descr):
        super().__init__(cell, char, word, descr, cell.describe(cell.value))

    def set(self, token, /):
        """
        coerce `token` and store it; the cell is untouched when coercion fails.

        errors
        - CoercionError when the token does not satisfy the cell's rule.
        """
        cell = self._cell
        if cell.kind is Kind.OPTIONAL:
            cell.value = coerce(cell.type, token)
        else:
            cell.value = coerce(type(cell), token)


__all__ = (
    "ArgumentType",
    "Argument",
    "Flag",
    "Option",
    "coerce",
)
