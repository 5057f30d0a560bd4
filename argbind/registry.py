"""
Argbind argument registry: the append-only set of flags and options.

Rules
- every entry needs a char key ("c" → -c) and/or a word key ("name" → --name).
- word keys are non-empty and never start with the short-key delimiter.
- keys are unique across flags and options unless an entry waives the check
  (unique=False). flags and options are looked up separately; when two
  entries of the same family share a key the earlier one keeps winning and a
  ShadowedKeyWarning is emitted.
- entries are never removed and cannot be added while a parse is running.

Registration problems are programming errors: they raise TypeError/ValueError
immediately instead of being reported as parse faults.
"""
import warnings
from contextlib import contextmanager

from .arguments import Flag, Option
from .faults import ShadowedKeyWarning
from .storage import Bool, Cell, Kind
from .utils import Unset

CHAR_DELIMITER = "-"
WORD_DELIMITER = "--"
VALUE_DELIMITER = "="


class Registry:
    """
    ordered collection of Flag and Option entries with O(1) key lookups.
    """
    __slots__ = ("_flags", "_options", "_flagkeys", "_optionkeys", "_frozen")

    def __init__(self):
        self._flags = []
        self._options = []
        # (char → entry, word → entry) per family; the first registration of a key wins
        self._flagkeys = ({}, {})
        self._optionkeys = ({}, {})
        self._frozen = False

    @property
    def flags(self):
        return tuple(self._flags)

    @property
    def options(self):
        return tuple(self._options)

    def entries(self):
        yield from self._flags
        yield from self._options

    def __len__(self):
        return len(self._flags) + len(self._options)

    def __iter__(self):
        return self.entries()

    @contextmanager
    def frozen(self):
        """
        reject registrations for the duration of the block.
        """
        if self._frozen:
            raise RuntimeError("registry is already in use by a running parse")
        self._frozen = True
        try:
            yield self
        finally:
            self._frozen = False

    def _validate(self, char, word, unique):
        if self._frozen:
            raise RuntimeError("cannot register arguments while parsing")
        if char is Unset and word is Unset:
            raise TypeError("at least one of char key or word key must be given")
        if char is not Unset:
            if not isinstance(char, str):
                raise TypeError("char key must be a string, not %r" % type(char).__name__)
            if len(char) != 1:
                raise ValueError("char key must be exactly one character, got %r" % char)
        if word is not Unset:
            if not isinstance(word, str):
                raise TypeError("word key must be a string, not %r" % type(word).__name__)
            if not word:
                raise ValueError("word key must be a non-empty string")
            if word.startswith(CHAR_DELIMITER):
                raise ValueError("word key %r must not start with %r" % (word, CHAR_DELIMITER))
        if not unique:
            return
        if any(char in chars for chars, _ in (self._flagkeys, self._optionkeys)):
            raise ValueError("char key %r is already in use" % char)
        if any(word in words for _, words in (self._flagkeys, self._optionkeys)):
            raise ValueError("word key %r is already in use" % word)

    def _index(self, entry, keys):
        for key, table in zip((entry.char, entry.word), keys):
            if key is Unset:
                continue
            if table.setdefault(key, entry) is not entry:
                warnings.warn(ShadowedKeyWarning(
                    "key %r is shadowed by an earlier registration and is unreachable for %r" % (key, entry.descr or entry.keys)
                ), stacklevel=4)

    def addflag(self, cell, char=Unset, word=Unset, description="", /, *, default=False, unique=True):
        """
        register a presence-only flag.

        parameters
        - cell: Bool
          storage to write; receives `default` immediately.
        - char, word: Unset | str
          keys; at least one must be given.
        - description: str
          help text.
        - default: bool
          value held while the flag is absent; triggering writes `not default`.
        - unique: bool
          check the keys against every existing entry.

        returns
        - the new Flag.
        """
        if not isinstance(cell, Bool):
            raise TypeError("flag storage must be a Bool cell, not %r" % type(cell).__name__)
        if not isinstance(default, bool):
            raise TypeError("flag default must be a bool")
        if not isinstance(description, str):
            raise TypeError("description must be a string")
        self._validate(char, word, unique)
        cell.value = default
        self._flags.append(flag := Flag(cell, char, word, description, default))
        self._index(flag, self._flagkeys)
        return flag

    def addoption(self, cell, char=Unset, word=Unset, description="", /, *, unique=True):
        """
        register a value-bearing option.

        the cell's current value is the default (shown in help); Optional
        cells are reset to unset and have no default.
        """
        if not isinstance(cell, Cell):
            raise TypeError("option storage must be a cell, not %r" % type(cell).__name__)
        if not isinstance(description, str):
            raise TypeError("description must be a string")
        self._validate(char, word, unique)
        if cell.kind is Kind.OPTIONAL:
            cell.reset()
        self._options.append(option := Option(cell, char, word, description))
        self._index(option, self._optionkeys)
        return option

    def findflag(self, *, char=Unset, word=Unset):
        chars, words = self._flagkeys
        return chars.get(char, Unset) if char is not Unset else words.get(word, Unset)

    def findoption(self, *, char=Unset, word=Unset):
        chars, words = self._optionkeys
        return chars.get(char, Unset) if char is not Unset else words.get(word, Unset)


__all__ = (
    "CHAR_DELIMITER",
    "WORD_DELIMITER",
    "VALUE_DELIMITER",
    "Registry",
)
