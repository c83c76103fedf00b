# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2026/10/19 14:36:22
# @Author : Kariko Lin

"""Typed value <-> text conversion.

INI only knows text. Every typed read or write of a `Field` goes through
the table below, which is built once on import and can be extended with
`register_converter()`:

    ```python
    register_converter(
        Person,
        lambda p: f'{p.id},{p.name}',
        lambda s: Person(*s.split(',', 1)))
    ini['staff']['lead'] = Person(1, 'abin')
    ```

Python `int` and `float` are unbounded/double. The `IntN`/`UIntN`/`Float32`
classes below are there to get C-like range checks.
"""

import math
import re
from struct import pack, unpack
from sys import float_info
from typing import Any, Callable, ClassVar, Iterable, NamedTuple, get_args, get_origin

from .consts import DEFAULT_DELIMITER, FALSE_TOKENS
from .errors import IniValueOutOfRange, InvalidIniValue
from .utils import split, trim

__all__ = [
    'Converter', 'ConverterRegistry', 'converters',
    'register_converter', 'sequence_converter',
    'BoundedInt', 'Int8', 'Int16', 'Int32', 'Int64',
    'UInt8', 'UInt16', 'UInt32', 'UInt64',
    'Float32', 'Float64', 'Char'
]

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')
_FLOAT_PATTERN = re.compile(
    r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
_FLOAT_SPECIALS = re.compile(r'[+-]?(?:inf|infinity|nan)', re.IGNORECASE)

FLT_MAX = 3.4028234663852886e+38
_MAX_BOUNDED_DIGITS = len(str(1 << 64))


class BoundedInt(int):
    """An `int` that refuses values its C counterpart could not hold."""
    bits: ClassVar[int] = 64
    signed: ClassVar[bool] = True

    def __new__(cls, value: Any = 0) -> 'BoundedInt':
        ret = super().__new__(cls, value)
        if not cls.lowest() <= ret <= cls.highest():
            raise IniValueOutOfRange(
                '%d is out of range for %s [%d, %d]'
                % (ret, cls.__name__, cls.lowest(), cls.highest()))
        return ret

    @classmethod
    def lowest(cls) -> int:
        return -(1 << (cls.bits - 1)) if cls.signed else 0

    @classmethod
    def highest(cls) -> int:
        return (1 << (cls.bits - 1)) - 1 if cls.signed else (1 << cls.bits) - 1


class Int8(BoundedInt):
    bits = 8


class Int16(BoundedInt):
    bits = 16


class Int32(BoundedInt):
    bits = 32


class Int64(BoundedInt):
    bits = 64


class UInt8(BoundedInt):
    bits, signed = 8, False


class UInt16(BoundedInt):
    bits, signed = 16, False


class UInt32(BoundedInt):
    bits, signed = 32, False


class UInt64(BoundedInt):
    bits, signed = 64, False


class Float64(float):
    @classmethod
    def lowest(cls) -> float:
        return -float_info.max

    @classmethod
    def highest(cls) -> float:
        return float_info.max


class Float32(float):
    """A `float` rounded to single precision on construction."""

    def __new__(cls, value: Any = 0.0) -> 'Float32':
        ret = float(value)
        if math.isfinite(ret):
            try:
                ret = unpack('<f', pack('<f', ret))[0]
            except OverflowError:
                raise IniValueOutOfRange(
                    f'{ret!r} is out of range for Float32') from None
        return super().__new__(cls, ret)

    @classmethod
    def lowest(cls) -> float:
        return -FLT_MAX

    @classmethod
    def highest(cls) -> float:
        return FLT_MAX


class Char(str):
    """Exactly one character."""

    def __new__(cls, value: str) -> 'Char':
        ret = super().__new__(cls, value)
        if len(ret) != 1:
            raise InvalidIniValue(f'{value!r} is not a single character')
        return ret


class Converter(NamedTuple):
    encode: Callable[[Any], str]
    decode: Callable[[str], Any]


# built-in encoders / decoders

def _encode_bool(value: Any) -> str:
    return 'true' if value else 'false'


def _decode_bool(text: str) -> bool:
    return text.lower() not in FALSE_TOKENS


def _decode_char(text: str) -> Char:
    if not text:
        raise InvalidIniValue('cannot read an empty string as Char')
    return Char(text[0])


def _int_pair(tp: type[int]) -> Converter:
    def encode(value: Any) -> str:
        return '%d' % tp(value)

    def decode(text: str) -> int:
        if not text:
            raise InvalidIniValue(
                f'cannot read an empty string as {tp.__name__}')
        if not _INT_PATTERN.fullmatch(text):
            raise InvalidIniValue(f'{text!r} is not an integer')
        # digits past 20 never fit 64 bits, and int() itself gives up
        # beyond sys.get_int_max_str_digits().
        digits = text.lstrip('+-').lstrip('0')
        if issubclass(tp, BoundedInt) and len(digits) > _MAX_BOUNDED_DIGITS:
            raise IniValueOutOfRange(
                f'{len(digits)}-digit number is out of range for {tp.__name__}')
        try:
            return tp(int(text))
        except ValueError as e:
            if isinstance(e, IniValueOutOfRange):
                raise
            raise IniValueOutOfRange(
                f'{len(digits)}-digit number is out of range for {tp.__name__}'
            ) from None

    return Converter(encode, decode)


def _encode_double(value: Any) -> str:
    # repr() is the shortest text that reads back to the very same double.
    return repr(float(value))


def _encode_single(value: Any) -> str:
    value = Float32(value)
    if not math.isfinite(value):
        return repr(float(value))
    for digits in range(6, 10):
        text = '%.*g' % (digits, value)
        try:
            if Float32(float(text)) == value:
                return text
        except IniValueOutOfRange:
            continue
    return '%.9g' % value


def _float_pair(tp: type[float], encode: Callable[[Any], str]) -> Converter:
    def decode(text: str) -> float:
        if not text:
            raise InvalidIniValue(
                f'cannot read an empty string as {tp.__name__}')
        if _FLOAT_SPECIALS.fullmatch(text):
            return tp(float(text))
        if not _FLOAT_PATTERN.fullmatch(text):
            raise InvalidIniValue(f'{text!r} is not a number')
        ret = float(text)
        if math.isinf(ret):
            raise IniValueOutOfRange(
                f'{text!r} is out of range for {tp.__name__}')
        return tp(ret)

    return Converter(encode, decode)


class ConverterRegistry:
    """类型 -> (encode, decode) 对照表。

    写值时按`type(value).__mro__`找编码器（所以`bool`不会被当成`int`）；
    读值时按请求的类型找解码器。`list[int]`这类带参数的序列类型在
    第一次用到时现场组装。
    """

    def __init__(self) -> None:
        self.__table: dict[Any, Converter] = {}

    def register(
        self, tp: Any,
        encode: Callable[[Any], str],
        decode: Callable[[str], Any]
    ) -> None:
        """Add or replace the converter for `tp`."""
        self.__table[tp] = Converter(encode, decode)

    def __contains__(self, tp: object) -> bool:
        try:
            self.lookup(tp)
        except TypeError:
            return False
        return True

    def lookup(self, tp: Any) -> Converter:
        if tp in self.__table:
            return self.__table[tp]

        origin = get_origin(tp)
        if origin in (list, tuple, set, frozenset):
            args = [i for i in get_args(tp) if i is not Ellipsis]
            if len(args) == 1:
                conv = self.sequence(args[0], container=origin)
                self.__table[tp] = conv
                return conv
        elif isinstance(tp, type):
            for base in tp.__mro__[1:]:
                if base in self.__table:
                    return self.__table[base]
        raise TypeError(f'no converter registered for {tp!r}')

    def encode(self, value: Any, tp: Any = None) -> str:
        if tp is not None:
            return self.lookup(tp).encode(value)
        for base in type(value).__mro__:
            if base in self.__table:
                return self.__table[base].encode(value)
        raise TypeError(
            f'no converter registered for {type(value).__name__}')

    def decode(self, text: str, tp: Any) -> Any:
        return self.lookup(tp).decode(text)

    def sequence(
        self, item_type: Any = None,
        delimiter: str = DEFAULT_DELIMITER,
        container: Callable[[Iterable[Any]], Any] = list
    ) -> Converter:
        """Delimiter-joined element conversions.

        With `item_type=None` every element is encoded by its own type
        and decoded as `str`. An empty text decodes to an empty container.
        """
        def encode(values: Iterable[Any]) -> str:
            return delimiter.join(self.encode(i, item_type) for i in values)

        def decode(text: str) -> Any:
            if not text:
                return container(())
            return container(
                self.decode(trim(i), str if item_type is None else item_type)
                for i in split(text, delimiter))

        return Converter(encode, decode)


converters = ConverterRegistry()
converters.register(bool, _encode_bool, _decode_bool)
converters.register(str, str, str)
converters.register(Char, lambda v: str(Char(v)), _decode_char)
converters.register(int, *_int_pair(int))
for _tp in (Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64):
    converters.register(_tp, *_int_pair(_tp))
converters.register(float, *_float_pair(float, _encode_double))
converters.register(Float64, *_float_pair(Float64, _encode_double))
converters.register(Float32, *_float_pair(Float32, _encode_single))
converters.register(list, *converters.sequence())
converters.register(tuple, *converters.sequence(container=tuple))
del _tp

register_converter = converters.register


def sequence_converter(
    item_type: Any = None, delimiter: str = DEFAULT_DELIMITER
) -> Converter:
    return converters.sequence(item_type, delimiter)
