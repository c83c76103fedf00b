# -*- encoding: utf-8 -*-
# @File   : utils.py
# @Time   : 2026/10/19 14:11:50
# @Author : Kariko Lin

"""String helpers shared by the model, the converters and user code."""

import logging
from typing import Iterable

import chardet

from .consts import WHITESPACES

__all__ = ['trim', 'split', 'join', 'decode_bytes']

logger = logging.getLogger(__name__)


def trim(s: str) -> str:
    """去掉两端空白字符（`" \\t\\n\\r\\f\\v"`）。"""
    return s.strip(WHITESPACES)


def split(s: str, delimiter: str, skip_empty: bool = False) -> list[str]:
    """Split `s` by `delimiter`, keeping empty pieces unless `skip_empty`.

    `split('', ',')` gives `['']`, and `split(',', ',')` gives `['', '']`.
    """
    if not delimiter:
        raise ValueError('delimiter must not be empty')
    ret = s.split(delimiter)
    if skip_empty:
        ret = [i for i in ret if i]
    return ret


def join(items: Iterable[object], separator: str) -> str:
    return separator.join(str(i) for i in items)


def decode_bytes(raw: bytes) -> str:
    """Guess the codec with chardet, falling back to utf-8 then gbk."""
    codec = chardet.detect(raw)
    if codec is None or codec['confidence'] < 0.8:
        codec = {'encoding': 'utf-8', 'confidence': 0.0}
    logger.debug('decoding %d bytes as %s', len(raw), codec['encoding'])

    # fallbacks
    try:
        return raw.decode(codec['encoding'])
    except UnicodeDecodeError:
        logger.debug('%s failed, retry with gbk', codec['encoding'])
        return raw.decode('gbk')
