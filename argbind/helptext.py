"""
Argbind help text: a pure serializer over registry entries.

Layout (plain text)
    ----------------------------------------
    <program description>
    Flags:
     -s --enable-speedy-mode ....[default:    false] go fast
    Arguments:
     -n --num-cakes .............[default:        0] the number of cakes
        --cake-name .............[default: "cakeman"] name your cake

- the char key column is "-c" or two spaces.
- the word key column is " --word " padded with dots to a fixed width.
- defaults are right-aligned in an 8 wide column; Optional entries have none.

Palette keys (rich rendering)
- help-rule, help-description, help-section
- flag-name, option-name, default-value, argument-description

Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.console import Group
from rich.text import Text

from .arguments import Flag
from .registry import CHAR_DELIMITER, WORD_DELIMITER
from .utils import Unset

RULE = "-" * 40
SPACER = " " + "." * 25


def _columns(entry):
    char = CHAR_DELIMITER + entry.char if entry.char is not Unset else "  "
    if entry.word is not Unset:
        word = (" " + WORD_DELIMITER + entry.word + " ").ljust(len(SPACER), ".")
    else:
        word = SPACER
    return char, word, "[default: %8s] " % entry.display, entry.descr


def helplines(registry, description="", /):
    """
    yield the help text lines for every entry of `registry`.

    the last line is empty so the joined text ends with a blank line.
    """
    yield RULE
    if description:
        yield description
    if registry.flags:
        yield "Flags:"
        for flag in registry.flags:
            yield " " + "".join(_columns(flag))
    if registry.options:
        yield "Arguments:"
        for option in registry.options:
            yield " " + "".join(_columns(option))
    yield ""


def gethelp(registry, description="", /):
    return "\n".join(helplines(registry, description)) + "\n"


class HelpText:
    """
    renderable help text; str() gives the plain layout, rich gets a styled one.
    """
    __slots__ = ("_registry", "_description", "_colorful")

    def __init__(self, registry, description="", /, *, colorful=True):
        if not isinstance(description, str):
            raise TypeError("program description must be a string")
        self._registry = registry
        self._description = description
        self._colorful = colorful

    def __str__(self):
        return gethelp(self._registry, self._description)

    def __rich__(self):
        styles = defaultdict(str, {
            "help-rule": "#4B5563",  # slate rule
            "help-description": "italic #A3A3A3",  # neutral gray
            "help-section": "bold #FFFFFF",  # pure white headers
            "flag-name": "bold #22C55E",  # green for flags
            "option-name": "bold #00E6FF",  # cyan for options
            "default-value": "bold #FFD600",  # amber defaults
            "argument-description": "#9CA3AF",  # muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            return Text(fragment, styles[style] if self._colorful else "")

        renders = [text(RULE, "help-rule")]
        if self._description:
            renders.append(text(self._description, "help-description"))

        for label, entries in (("Flags:", self._registry.flags), ("Arguments:", self._registry.options)):
            if not entries:
                continue
            renders.append(text(label, "help-section"))
            for entry in entries:
                char, word, default, descr = _columns(entry)
                style = "flag-name" if isinstance(entry, Flag) else "option-name"
                renders.append(Text.assemble(
                    " ",
                    text(char, style),
                    text(word, style),
                    text(default, "default-value"),
                    text(descr, "argument-description"),
                ))

        renders.append(Text(""))
        return Group(*renders)


__all__ = (
    "RULE",
    "SPACER",
    "helplines",
    "gethelp",
    "HelpText",
)
