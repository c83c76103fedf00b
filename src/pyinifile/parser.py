# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 16:18:41
# @Author : Kariko Lin

"""File handlers for `IniFile`.

`IniFile.load()`/`IniFile.save()` report failure with a `bool`; the handlers
here let `OSError` go, for callers who want to deal with it themselves.
Besides plain INI text, a document can be mirrored to JSON or YAML:

    ```yaml
    protocol: 1
    sections:
      '':
        pairs:
          loose: value
      database:
        comment: ['# comment about database section']
        pairs:
          host: {value: localhost, comment: ['; database host']}
          port: '3306'
    ```
"""

import json
import logging
from typing import Any, TypedDict
from warnings import warn

import yaml

from .abstract import FileHandler
from .convert import converters
from .model import CaseInsensitiveIniFile, IniFile, Section
from .utils import decode_bytes

__all__ = ['IniFileParser', 'IniJsonParser', 'IniYamlParser']

logger = logging.getLogger(__name__)


class IniParser(FileHandler[IniFile]):
    def __init__(
        self, filename: str, encoding: str | None = None, *,
        case_insensitive: bool = False
    ) -> None:
        super().__init__(filename, encoding)
        self._doctype = (CaseInsensitiveIniFile if case_insensitive
                         else IniFile)

    def __str__(self) -> str:
        return f'{type(self).__name__}: {super().__str__()} ({self._codec})'


class IniFileParser(IniParser):
    def read(self) -> IniFile:
        """读取`IniFileParser`实例指定的 INI 文件。"""
        ret = self._doctype()
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return ret.read(fp)
        except UnicodeDecodeError:
            logger.debug('"%s" is not %s, guessing codec', self._fn, self._codec)
            with open(self._fn, 'rb') as fp:
                raw = fp.read()
            return ret.from_string(decode_bytes(raw))

    def write(self, instance: IniFile) -> None:
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            instance.write(fp)


class _PairPack(TypedDict, total=False):
    value: str
    comment: list[str]


class _SectionPack(TypedDict, total=False):
    comment: list[str]
    pairs: dict[str, _PairPack | str]


class _IniTree(TypedDict):
    protocol: int
    sections: dict[str, _SectionPack]


class IniTreeParser(IniParser):
    """Base of the structured (JSON / YAML) mirrors."""
    PROTOCOL = 1

    def __init__(
        self, filename: str, encoding: str = 'utf-8', *,
        case_insensitive: bool = False
    ) -> None:
        super().__init__(filename, encoding,
                         case_insensitive=case_insensitive)

    @staticmethod
    def to_tree(instance: IniFile) -> _IniTree:
        sections: dict[str, _SectionPack] = {}
        for name, section in instance.items():
            pack: _SectionPack = {}
            if section.has_comment():
                pack['comment'] = section.comment.to_list()
            pack['pairs'] = {}
            for key, field in section.items():
                if field.has_comment():
                    pack['pairs'][key] = _PairPack(
                        value=field.value, comment=field.comment.to_list())
                else:
                    pack['pairs'][key] = field.value
            sections[name] = pack
        return _IniTree(protocol=IniTreeParser.PROTOCOL, sections=sections)

    @staticmethod
    def __check_line(name: str, text: str) -> None:
        if '\n' in text or '\r' in text:
            warn(f'"{name}" 含有换行，保存为 INI 时会被拆成多行。')

    @staticmethod
    def __scalar(val: Any) -> str:
        if val is None:
            return ''
        return val if isinstance(val, str) else converters.encode(val)

    def from_tree(self, tree: dict[str, Any]) -> IniFile:
        ret = self._doctype()
        for name, pack in (tree.get('sections') or {}).items():
            name = str(name)
            self.__check_line(name, name)
            section: Section = ret[name]
            if pack.get('comment'):
                section.comment = pack['comment']
            for key, val in (pack.get('pairs') or {}).items():
                key = str(key)
                self.__check_line(key, key)
                if isinstance(val, dict):
                    field = section[key]
                    # hand-written trees may hold bare numbers or booleans
                    field.value = self.__scalar(val.get('value'))
                    if val.get('comment'):
                        field.comment = val['comment']
                else:
                    section[key].value = self.__scalar(val)
                self.__check_line(key, section[key].value)
        return ret


class IniJsonParser(IniTreeParser):
    def read(self) -> IniFile:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return self.from_tree(json.load(fp))

    def write(self, instance: IniFile, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(self.to_tree(instance), fp,
                      ensure_ascii=False, indent=indent)


class IniYamlParser(IniTreeParser):
    def read(self) -> IniFile:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return self.from_tree(yaml.safe_load(fp) or {})

    def write(self, instance: IniFile) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(self.to_tree(instance), fp,
                           allow_unicode=True, sort_keys=False)
