import functools
from typing import final


@final
class UnsetType:
    """
    singleton sentinel representing an "unset" value.

    intent
    - distinguishes "not provided" from a user-supplied value (including None,
      zero or other falsy values).
    - doubles as the state of an optional storage cell that was never parsed.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process-wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    - final: subclassing is forbidden to preserve semantics (see __init_subclass__).
    """

    def __or__(self, other, /):
        """
        support UnsetType | T in annotations (internal convenience only).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        support T | UnsetType in annotations (internal convenience only).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        return the singleton instance (process-wide).
        """
        return super().__new__(cls)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        """
        disallow subclassing to keep sentinel semantics stable.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def nullify(object, default=None, /):
    """
    return `default` when `object` is Unset; otherwise return `object`.

    notes
    - this function does not copy; it simply passes through the object.
    """
    return default if object is Unset else object


def rename(x, /, name=None):
    """
    set a stable __name__/__qualname__ on a callable, or return a curried renamer.

    parameters
    - x: callable | str
      • callable → rename in place.
      • str      → desired name; returns a callable that will rename a future function.
    - name: str | None
      target name to assign.

    errors
    - TypeError if a callable is given and the name is not a string.
    """
    if isinstance(x, str):
        return functools.partial(rename, name=x)
    if not isinstance(name, str):
        raise TypeError("callable name must be a string")
    x.__qualname__ = name
    x.__name__ = name
    return x


@functools.cache
def ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth") for nicer phrasing in faults.
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


__all__ = (
    "UnsetType",
    "Unset",
    "nullify",
    "rename",
    "ordinal",
)
