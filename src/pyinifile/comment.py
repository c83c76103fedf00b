# -*- encoding: utf-8 -*-
# @File   : comment.py
# @Time   : 2026/10/19 14:20:03
# @Author : Kariko Lin

from typing import Iterable, Iterator
from warnings import warn

from .consts import COMMENT_PREFIXES, CommentMark
from .utils import trim

__all__ = ['Comment']


class Comment:
    """小节或键值对上方的注释行。

    存进来的每一行都已经带好标记（`;`或`#`），写文件时原样输出。
    """

    def __init__(self, lines: Iterable[str] | None = None) -> None:
        # marked lines are kept verbatim, as the parser reads them.
        self.__lines: list[str] = []
        for line in lines or ():
            if trim(line).startswith(COMMENT_PREFIXES):
                self.__lines.append(line)
            else:
                self.__lines.extend(self.format(line))

    @staticmethod
    def format(text: str | Iterable[str], marker: str = ';') -> list[str]:
        """Split, trim and prefix `text`. Blank lines are dropped."""
        if marker not in (CommentMark.SEMICOLON, CommentMark.HASH):
            warn(f'Unknown comment marker {marker!r}, use ";" instead.')
        mark = CommentMark.coerce(marker).value
        chunks = [text] if isinstance(text, str) else text
        ret: list[str] = []
        for chunk in chunks:
            for line in chunk.splitlines():
                line = trim(line)
                if not line:
                    continue
                ret.append(line if line.startswith(mark) else f'{mark} {line}')
        return ret

    def add(self, text: str | Iterable[str], marker: str = ';') -> None:
        self.__lines.extend(self.format(text, marker))

    def set(self, text: str | Iterable[str], marker: str = ';') -> None:
        self.__lines = self.format(text, marker)

    def clear(self) -> None:
        self.__lines.clear()

    def empty(self) -> bool:
        return not self.__lines

    def view(self) -> list[str]:
        """The live list. Edit it at your own risk."""
        return self.__lines

    def to_list(self) -> list[str]:
        return self.__lines.copy()

    def copy(self) -> 'Comment':
        return Comment(self.__lines)

    def __len__(self) -> int:
        return len(self.__lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__lines)

    def __bool__(self) -> bool:
        return bool(self.__lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Comment):
            return NotImplemented
        return self.__lines == other.__lines

    def __str__(self) -> str:
        return '\n'.join(self.__lines)

    def __repr__(self) -> str:
        return f'Comment({self.__lines!r})'
