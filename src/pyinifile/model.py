# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 15:02:48
# @Author : Kariko Lin

"""
Basically INI structure with comments:

    ```ini
    ; pairs before any header, see `IniFile.header`.
    key = val

    # comments above a header belong to the section,
    [section]
    ; and those above a pair belong to the pair.
    key233 = val666
    ```

No inline (end-of-line) comments, no nested sections.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from io import StringIO
from os import PathLike
from typing import Any, ClassVar, TextIO

from .comment import Comment
from .consts import COMMENT_PREFIXES, PAIRING, SECTION_CLOSE, SECTION_OPEN
from .convert import converters
from .errors import EntryNotFound
from .utils import decode_bytes, trim

__all__ = [
    'Field', 'Section', 'IniFile',
    'CaseInsensitiveSection', 'CaseInsensitiveIniFile'
]

logger = logging.getLogger(__name__)

_IMMUTABLES = (str, bytes, int, float, complex, tuple, frozenset)


class _Commentable:
    """Lazy comment storage shared by `Field` and `Section`."""
    _comment: Comment | None = None

    @property
    def comment(self) -> Comment:
        """The owned comment, created on first access."""
        if self._comment is None:
            self._comment = Comment()
        return self._comment

    @comment.setter
    def comment(self, value: Comment | Iterable[str] | None) -> None:
        """Take lines (or another `Comment`); unmarked lines get a `;`."""
        if value is None:
            self._comment = None
            return
        value = value.copy() if isinstance(value, Comment) else Comment(value)
        self._comment = value or None

    def has_comment(self) -> bool:
        return bool(self._comment)

    def set_comment(self, text: str | Iterable[str], marker: str = ';') -> None:
        lines = Comment.format(text, marker)
        self._comment = Comment(lines) if lines else None

    def add_comment(self, text: str | Iterable[str], marker: str = ';') -> None:
        lines = Comment.format(text, marker)
        if lines:
            self.comment.view().extend(lines)

    def clear_comment(self) -> None:
        self._comment = None

    def _comment_lines(self) -> list[str]:
        return [] if self._comment is None else self._comment.to_list()


class Field(_Commentable):
    """一个键对应的值。

    值永远以字符串存储：按类型读取时现场解码，按类型写入时立即编码，
    不缓存任何类型化的结果。
    """

    def __init__(self, value: Any = None, tp: Any = None) -> None:
        self.__value = ''
        if isinstance(value, Field):
            self.__value = value.value
            self.comment = value._comment
        elif value is not None:
            self.set(value, tp)

    @property
    def value(self) -> str:
        """The raw text."""
        return self.__value

    @value.setter
    def value(self, text: str) -> None:
        self.__value = str(text)

    def set(self, value: Any, tp: Any = None) -> 'Field':
        """Encode `value` (as `tp`, or as its own type) and store the text.

        The comment is kept.
        """
        if isinstance(value, Field):
            self.__value = value.value
        elif value is None:
            self.__value = ''
        else:
            self.__value = converters.encode(value, tp)
        return self

    def get(self, tp: Any = str) -> Any:
        """Decode the stored text as `tp`.

        Raises:
            InvalidIniValue: the text is not a `tp` at all.
            IniValueOutOfRange: the number doesn't fit in `tp`.
            TypeError: no converter registered for `tp`.
        """
        return converters.decode(self.__value, tp)

    as_ = get

    def get_into(self, out: Any, tp: Any = None) -> Any:
        """Decode into the mutable `out` in place and return it."""
        if isinstance(out, _IMMUTABLES):
            raise TypeError(
                f'cannot decode into immutable {type(out).__name__}')
        ret = self.get(type(out) if tp is None else tp)
        if isinstance(out, list):
            out[:] = ret
        elif isinstance(out, (dict, set)):
            out.clear()
            out.update(ret)
        elif hasattr(out, '__dict__'):
            out.__dict__.update(vars(ret))
        else:
            raise TypeError(f'cannot decode into {type(out).__name__}')
        return out

    def copy(self) -> 'Field':
        return Field(self)

    def __str__(self) -> str:
        return self.__value

    def __int__(self) -> int:
        return self.get(int)

    def __float__(self) -> float:
        return self.get(float)

    def __bool__(self) -> bool:
        return self.get(bool)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.__value == other
        if not isinstance(other, Field):
            return NotImplemented
        return (self.__value == other.value
                and self._comment_lines() == other._comment_lines())

    def __repr__(self) -> str:
        return f'Field({self.__value!r})'


class Section(_Commentable, MutableMapping[str, Field]):
    """INI 小节字典。

    键在存取前都会去掉两端空白。注意`section[key]`是“读或插入”：
    键不存在时会插入一个空值，只想判断存在与否请用`contains()`/`in`。
    """

    def __init__(
        self,
        pairs: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        *, name: str = '',
        comment: str | Iterable[str] | None = None
    ) -> None:
        self.name = name
        # folded key -> field, and folded key -> first spelling seen.
        self.__raw: dict[str, Field] = {}
        self.__keyproxy: dict[str, str] = {}
        if pairs:
            self.set(pairs)
        if comment is not None:
            self.set_comment(comment)

    @staticmethod
    def _fold(key: str) -> str:
        return key

    def _index(self, key: str) -> tuple[str, str]:
        spelled = trim(key)
        return self._fold(spelled), spelled

    def __getitem__(self, key: str) -> Field:
        folded, spelled = self._index(key)
        if folded not in self.__raw:
            self.__raw[folded] = Field()
            self.__keyproxy[folded] = spelled
        return self.__raw[folded]

    def __setitem__(self, key: str, value: Any) -> None:
        if isinstance(value, Field):
            folded, spelled = self._index(key)
            self.__keyproxy.setdefault(folded, spelled)
            self.__raw[folded] = value.copy()
        else:
            self[key].set(value)

    def __delitem__(self, key: str) -> None:
        folded, spelled = self._index(key)
        if folded not in self.__raw:
            raise EntryNotFound(spelled, self.name)
        del self.__raw[folded]
        del self.__keyproxy[folded]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._index(key)[0] in self.__raw

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.__keyproxy.values()))

    def __len__(self) -> int:
        return len(self.__raw)

    def set(
        self,
        key: str | Mapping[str, Any] | Iterable[tuple[str, Any]],
        value: Any = None,
        tp: Any = None
    ) -> None:
        """`set(key, value)`, or `set(pairs)` to insert many at once."""
        if isinstance(key, str):
            if tp is None:
                self[key] = value
            else:
                self[key].set(value, tp)
            return
        pairs = key.items() if isinstance(key, Mapping) else key
        for k, v in pairs:
            self[k] = v

    def contains(self, key: str) -> bool:
        return key in self

    def at(self, key: str) -> Field:
        """Strict lookup, never inserts.

        Raises:
            EntryNotFound: no such key.
        """
        folded, spelled = self._index(key)
        if folded not in self.__raw:
            raise EntryNotFound(spelled, self.name)
        return self.__raw[folded]

    def get(self, key: str, default: Any = None) -> Field:
        """A *copy* of the field, or a new field holding `default`."""
        folded, _ = self._index(key)
        if folded in self.__raw:
            return self.__raw[folded].copy()
        return Field(default)

    def setdefault(self, key: str, default: Any = None) -> Field:
        if key not in self and default is not None:
            self[key] = default
        return self[key]

    _MISSING = object()

    def pop(self, key: str, default: Any = _MISSING) -> Any:
        folded, spelled = self._index(key)
        if folded not in self.__raw:
            if default is self._MISSING:
                raise EntryNotFound(spelled, self.name)
            return default
        del self.__keyproxy[folded]
        return self.__raw.pop(folded)

    def remove(self, key: str) -> bool:
        """Delete `key`, telling whether there was one."""
        folded, _ = self._index(key)
        if folded not in self.__raw:
            return False
        del self[key]
        return True

    def erase(self, *keys: str) -> int:
        """Delete several keys, returning how many were there."""
        return sum(self.remove(i) for i in keys)

    def clear(self) -> None:
        self.__raw.clear()
        self.__keyproxy.clear()

    # snapshots, safe to mutate the section while walking them.
    def keys(self) -> list[str]:  # type: ignore[override]
        return list(self.__keyproxy.values())

    def values(self) -> list[Field]:  # type: ignore[override]
        return list(self.__raw.values())

    def items(self) -> list[tuple[str, Field]]:  # type: ignore[override]
        return list(zip(self.__keyproxy.values(), self.__raw.values()))

    def size(self) -> int:
        return len(self.__raw)

    def empty(self) -> bool:
        return not self.__raw

    def copy(self) -> 'Section':
        ret = type(self)(self.items(), name=self.name)
        ret.comment = self._comment
        return ret

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return (dict(self.items()) == dict(other.items())
                and self._comment_lines() == other._comment_lines())

    def __str__(self) -> str:
        return f'[{self.name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.name, len(self.__raw))


class CaseInsensitiveSection(Section):
    """Keys compare case-insensitively; the first spelling is kept."""

    @staticmethod
    def _fold(key: str) -> str:
        return key.casefold()


class IniFile(MutableMapping[str, Section]):
    """INI 文件（文档）表示。

    不属于任何小节的游离键值对放在名为`''`的小节里（也可用`self.header`）。
    同`Section`一样，`ini[name]`是“读或插入”。

    Sections and keys keep their insertion order, so a load/save
    round-trip keeps the file layout.
    """
    section_type: ClassVar[type[Section]] = Section

    def __init__(self) -> None:
        self.__raw: dict[str, Section] = {}
        self.__keyproxy: dict[str, str] = {}

    def _index(self, name: str) -> tuple[str, str]:
        spelled = trim(name)
        return self.section_type._fold(spelled), spelled

    @property
    def header(self) -> Section:
        """位于文件头部的，不属于任何小节的游离键值对。"""
        return self['']

    def __getitem__(self, name: str) -> Section:
        folded, spelled = self._index(name)
        if folded not in self.__raw:
            self.__raw[folded] = self.section_type(name=spelled)
            self.__keyproxy[folded] = spelled
        return self.__raw[folded]

    def __setitem__(
        self,
        name: str,
        value: Section | Mapping[str, Any] | Iterable[tuple[str, Any]]
    ) -> None:
        # shouldn't keep ptr to external sections or dicts.
        folded, spelled = self._index(name)
        spelled = self.__keyproxy.setdefault(folded, spelled)
        section = self.section_type(name=spelled)
        section.set(value.items() if isinstance(value, Mapping) else value)
        if isinstance(value, Section):
            section.comment = value._comment
        self.__raw[folded] = section

    def __delitem__(self, name: str) -> None:
        folded, spelled = self._index(name)
        if folded not in self.__raw:
            raise EntryNotFound(spelled)
        del self.__raw[folded]
        del self.__keyproxy[folded]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._index(name)[0] in self.__raw

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.__keyproxy.values()))

    def __len__(self) -> int:
        return len(self.__raw)

    def set(self, section: str, key: Any, value: Any = None,
            tp: Any = None) -> None:
        self[section].set(key, value, tp)

    def contains(self, section: str, key: str | None = None) -> bool:
        """Existence check that never inserts anything."""
        if section not in self:
            return False
        return key is None or key in self.__raw[self._index(section)[0]]

    def at(self, section: str) -> Section:
        """Strict lookup, never inserts.

        Raises:
            EntryNotFound: no such section.
        """
        folded, spelled = self._index(section)
        if folded not in self.__raw:
            raise EntryNotFound(spelled)
        return self.__raw[folded]

    def get(  # type: ignore[override]
        self, section: str, key: str, default: Any = None
    ) -> Field:
        """A copy of `[section] key`, or a field holding `default`."""
        if section not in self:
            return Field(default)
        return self.__raw[self._index(section)[0]].get(key, default)

    def setdefault(self, section: str, default: Any = None) -> Section:
        if section not in self and default is not None:
            self[section] = default
        return self[section]

    _MISSING = object()

    def pop(self, section: str, default: Any = _MISSING) -> Any:
        folded, spelled = self._index(section)
        if folded not in self.__raw:
            if default is self._MISSING:
                raise EntryNotFound(spelled)
            return default
        del self.__keyproxy[folded]
        return self.__raw.pop(folded)

    def remove(self, section: str) -> bool:
        if section not in self:
            return False
        del self[section]
        return True

    def clear(self) -> None:
        self.__raw.clear()
        self.__keyproxy.clear()

    def sections(self) -> list[str]:
        return list(self.__keyproxy.values())

    def keys(self) -> list[str]:  # type: ignore[override]
        return self.sections()

    def values(self) -> list[Section]:  # type: ignore[override]
        return list(self.__raw.values())

    def items(self) -> list[tuple[str, Section]]:  # type: ignore[override]
        return list(zip(self.__keyproxy.values(), self.__raw.values()))

    def size(self) -> int:
        return len(self.__raw)

    def empty(self) -> bool:
        return not self.__raw

    def copy(self) -> 'IniFile':
        ret = type(self)()
        for name, section in self.items():
            ret[name] = section
        return ret

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniFile):
            return NotImplemented
        return dict(self.items()) == dict(other.items())

    # text format

    def read(self, stream: Iterable[str]) -> 'IniFile':
        """Replace the whole document with what `stream` holds.

        Lines that are neither comments, headers nor `key=value` are
        skipped; this never fails on malformed input.
        """
        self.clear()
        current = ''
        pending: list[str] = []
        for lineno, line in enumerate(stream, 1):
            line = trim(line)
            if not line:
                continue
            if line.startswith(COMMENT_PREFIXES):
                pending.append(line)
                continue

            if line.startswith(SECTION_OPEN) and line.endswith(SECTION_CLOSE):
                name = trim(line[1:-1])
                if not name:
                    logger.debug('line %d: empty section name, ignored', lineno)
                    continue
                current, section = name, self[name]
                if pending:
                    section.comment = pending
                    pending = []
                continue

            if PAIRING not in line:
                logger.debug('line %d: ignored %r', lineno, line)
                continue
            key, val = line.split(PAIRING, 1)
            field = self[current][key]
            field.value = trim(val)
            if pending:
                field.comment = pending
                pending = []

        if pending:
            logger.debug('%d trailing comment line(s) dropped', len(pending))
        return self

    @staticmethod
    def _pair_lines(section: Section) -> Iterator[str]:
        for key, field in section.items():
            yield from field._comment_lines()
            yield f'{key}{PAIRING}{field.value}'

    def lines(self) -> Iterator[str]:
        """Serialized lines, without line terminators."""
        emitted = False
        if '' in self:
            for line in self._pair_lines(self.at('')):
                emitted = True
                yield line
        for name, section in self.items():
            if not name:
                continue
            if emitted:
                yield ''
            yield from section._comment_lines()
            yield f'{SECTION_OPEN}{name}{SECTION_CLOSE}'
            emitted = True
            yield from self._pair_lines(section)

    def write(self, stream: TextIO) -> None:
        for line in self.lines():
            stream.write(f'{line}\n')

    def from_string(self, text: str) -> 'IniFile':
        return self.read(StringIO(text))

    def to_string(self) -> str:
        buf = StringIO()
        self.write(buf)
        return buf.getvalue()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f'<{type(self).__name__} sections={self.sections()!r}>'

    def load(self, path: str | PathLike[str], encoding: str = 'utf-8') -> bool:
        """读取`path`指定的 INI 文件，成功与否以返回值告知。

        编码不对时（`UnicodeDecodeError`）改用 chardet 猜测编码重读。
        读取失败时文档保持原样。
        """
        try:
            try:
                with open(path, 'r', encoding=encoding) as fp:
                    text = fp.read()
            except UnicodeDecodeError:
                logger.debug('"%s" is not %s, guessing codec', path, encoding)
                with open(path, 'rb') as fp:
                    raw = fp.read()
                text = decode_bytes(raw)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('failed to load "%s": %s', path, e)
            return False
        self.from_string(text)
        return True

    def save(self, path: str | PathLike[str], encoding: str = 'utf-8') -> bool:
        try:
            with open(path, 'w', encoding=encoding) as fp:
                self.write(fp)
        except (OSError, UnicodeEncodeError) as e:
            logger.warning('failed to save "%s": %s', path, e)
            return False
        return True


class CaseInsensitiveIniFile(IniFile):
    """Section names and keys compare case-insensitively.

    Whatever spelling is written first is the one saved.
    """
    section_type = CaseInsensitiveSection
