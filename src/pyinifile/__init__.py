# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 16:40:12
# @Author : Kariko Lin

from .comment import Comment
from .consts import CommentMark
from .convert import (
    Char,
    Converter,
    ConverterRegistry,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    converters,
    register_converter,
    sequence_converter
)
from .errors import EntryNotFound, IniError, IniValueOutOfRange, InvalidIniValue
from .model import (
    CaseInsensitiveIniFile,
    CaseInsensitiveSection,
    Field,
    IniFile,
    Section
)
from .parser import IniFileParser, IniJsonParser, IniYamlParser
from .utils import join, split, trim

__all__ = [
    'IniFile', 'Section', 'Field', 'Comment', 'CommentMark',
    'CaseInsensitiveIniFile', 'CaseInsensitiveSection',
    'IniFileParser', 'IniJsonParser', 'IniYamlParser',
    'Converter', 'ConverterRegistry', 'converters',
    'register_converter', 'sequence_converter',
    'Int8', 'Int16', 'Int32', 'Int64',
    'UInt8', 'UInt16', 'UInt32', 'UInt64',
    'Float32', 'Float64', 'Char',
    'IniError', 'EntryNotFound', 'InvalidIniValue', 'IniValueOutOfRange',
    'trim', 'split', 'join'
]
