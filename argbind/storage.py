"""
Argbind storage cells: caller-owned, typed value holders.

Overview
- A cell is a small mutable handle created and kept by the host program. The
  parser borrows it at registration time and writes coerced values into it;
  the host reads `cell.value` once parsing returns.
- The set of cells is closed and tagged with a Kind:
  • Bool                                → Kind.BOOL
  • Int8 / Int16 / Int32 / Int64        → Kind.SIGNED
  • UInt8 / UInt16 / UInt32 / UInt64    → Kind.UNSIGNED
  • Char                                → Kind.CHAR
  • Float32 / Float64                   → Kind.FLOAT
  • String                              → Kind.STRING
  • Optional(T)                         → Kind.OPTIONAL (wraps any of the above)

Validation
- Every write (constructor, host assignment, parser) goes through validate(),
  so a cell never holds a value outside its declared range.

Example
    count = Int32(3)
    name = String("cakeman")
    required = Optional(Int64)
    ...
    if required.hasvalue:
        print(required.value)
"""
import builtins
from enum import Enum

from .coercion import roundsingle
from .utils import Unset, UnsetType, nullify


class Kind(Enum):
    """
    closed set of storage variants; coercion dispatches on this tag.
    """
    BOOL     = "bool"
    SIGNED   = "signed"
    UNSIGNED = "unsigned"
    CHAR     = "char"
    FLOAT    = "float"
    STRING   = "string"
    OPTIONAL = "optional"


class Cell:
    """
    base storage cell; concrete cells fix __kind__ and __default__.
    """
    __slots__ = ("_value",)

    __kind__ = Unset
    __default__ = Unset

    def __init__(self, value=Unset, /):
        if type(self).__kind__ is Unset:
            raise TypeError("cannot instantiate abstract cell %r" % type(self).__name__)
        self.value = nullify(value, type(self).__default__)

    @property
    def kind(self):
        return type(self).__kind__

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        self._value = self.validate(value)

    @classmethod
    def validate(cls, value):
        raise NotImplementedError

    @classmethod
    def describe(cls, value):
        """
        render a value the way help text shows defaults.
        """
        return str(value)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self._value)

    def __rich_repr__(self):
        yield self._value


class Bool(Cell):
    __slots__ = ()

    __kind__ = Kind.BOOL
    __default__ = False

    @classmethod
    def validate(cls, value):
        if not isinstance(value, bool):
            raise TypeError("Bool value must be a bool, not %r" % type(value).__name__)
        return value

    @classmethod
    def describe(cls, value):
        return "true" if value else "false"


class Integer(Cell):
    """
    fixed-width integer cell; subclasses declare `bits` and `signed`.

        class Int24(Integer, bits=24, signed=True): ...
    """
    __slots__ = ()

    __default__ = 0

    bits = Unset
    signed = Unset
    low = Unset
    high = Unset

    def __init_subclass__(cls, /, bits=Unset, signed=Unset, **options):
        super().__init_subclass__(**options)
        if bits is Unset:
            return
        if not isinstance(bits, int) or not 1 < bits <= 64:
            raise ValueError("integer width must be within 2 and 64 bits")
        if not isinstance(signed, bool):
            raise TypeError("integer signedness must be a bool")
        cls.bits = bits
        cls.signed = signed
        cls.__kind__ = Kind.SIGNED if signed else Kind.UNSIGNED
        cls.low = -(1 << (bits - 1)) if signed else 0
        cls.high = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1

    @classmethod
    def validate(cls, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("%s value must be an int, not %r" % (cls.__name__, type(value).__name__))
        if not cls.low <= value <= cls.high:
            raise ValueError("%s value must be within %d and %d" % (cls.__name__, cls.low, cls.high))
        return value


class Int8(Integer, bits=8, signed=True):
    __slots__ = ()


class Int16(Integer, bits=16, signed=True):
    __slots__ = ()


class Int32(Integer, bits=32, signed=True):
    __slots__ = ()


class Int64(Integer, bits=64, signed=True):
    __slots__ = ()


class UInt8(Integer, bits=8, signed=False):
    __slots__ = ()


class UInt16(Integer, bits=16, signed=False):
    __slots__ = ()


class UInt32(Integer, bits=32, signed=False):
    __slots__ = ()


class UInt64(Integer, bits=64, signed=False):
    __slots__ = ()


class Char(Cell):
    """
    single character cell; holds a one-character string.
    """
    __slots__ = ()

    __kind__ = Kind.CHAR
    __default__ = "\0"

    @classmethod
    def validate(cls, value):
        if not isinstance(value, str):
            raise TypeError("Char value must be a str, not %r" % type(value).__name__)
        if len(value) != 1:
            raise ValueError("Char value must be exactly one character")
        return value


class Floating(Cell):
    """
    floating point cell; `single` selects IEEE single precision.
    """
    __slots__ = ()

    __default__ = 0.0

    single = Unset

    def __init_subclass__(cls, /, single=Unset, **options):
        super().__init_subclass__(**options)
        if single is Unset:
            return
        cls.single = bool(single)
        cls.__kind__ = Kind.FLOAT

    @classmethod
    def validate(cls, value):
        if not isinstance(value, int | float) or isinstance(value, bool):
            raise TypeError("%s value must be a float, not %r" % (cls.__name__, type(value).__name__))
        try:
            return roundsingle(value) if cls.single else float(value)
        except OverflowError:
            raise ValueError("%s value is out of range" % cls.__name__) from None

    @classmethod
    def describe(cls, value):
        return "%g" % value


class Float32(Floating, single=True):
    __slots__ = ()


class Float64(Floating, single=False):
    __slots__ = ()


class String(Cell):
    __slots__ = ()

    __kind__ = Kind.STRING
    __default__ = ""

    @classmethod
    def validate(cls, value):
        if not isinstance(value, str):
            raise TypeError("String value must be a str, not %r" % type(value).__name__)
        return value

    @classmethod
    def describe(cls, value):
        return '"%s"' % value


class Optional(Cell):
    """
    required-but-deferred wrapper around any concrete cell type.

    - starts unset (value is Unset) and only holds a value once something
      assigns or parses one.
    - `type` is the wrapped cell class; its rules validate and coerce values.

        required = Optional(Int32)
        required.hasvalue   # False
    """
    __slots__ = ("_type",)

    __kind__ = Kind.OPTIONAL

    def __init__(self, type, value=Unset, /):
        if not isinstance(type, builtins.type) or not issubclass(type, Cell):
            raise TypeError("Optional() argument must be a cell type")
        if issubclass(type, Optional) or type.__kind__ is Unset:
            raise TypeError("Optional() argument must be a concrete, non-optional cell type")
        self._type = type
        self.value = value

    @property
    def type(self):
        return self._type

    @property
    def hasvalue(self):
        return self._value is not Unset

    def reset(self):
        self._value = Unset

    def validate(self, value):
        if isinstance(value, UnsetType):
            return value
        return self._type.validate(value)

    def describe(self, value):
        return "" if value is Unset else self._type.describe(value)

    def __repr__(self):
        return "Optional[%s](%r)" % (self._type.__name__, self._value)


__all__ = (
    "Kind",
    "Cell",
    "Bool",
    "Integer",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Char",
    "Floating",
    "Float32",
    "Float64",
    "String",
    "Optional",
)
