# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/19 14:02:37
# @Author : Kariko Lin

from enum import Enum


class CommentMark(str, Enum):
    SEMICOLON = ';'
    HASH = '#'

    @classmethod
    def coerce(cls, marker: object) -> 'CommentMark':
        """不认识的标记一律按`;`处理。"""
        try:
            return cls(marker)
        except ValueError:
            return cls.SEMICOLON


# same set as C `isspace()` in the "C" locale.
WHITESPACES = ' \t\n\r\f\v'

# lower-cased; anything else decodes to True.
FALSE_TOKENS = frozenset(('', '0', 'false'))

SECTION_OPEN = '['
SECTION_CLOSE = ']'
PAIRING = '='

# for sequence converters.
DEFAULT_DELIMITER = ','

COMMENT_PREFIXES = tuple(i.value for i in CommentMark)
