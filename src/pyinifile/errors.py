# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/19 14:05:11
# @Author : Kariko Lin


class IniError(Exception):
    """Base of every error raised by `pyinifile`."""
    pass


class EntryNotFound(IniError, KeyError):
    """Strict access (`at()`, `del`) to a section or key that is absent."""

    def __init__(self, entry: str, where: str | None = None) -> None:
        self.entry = entry
        self.where = where
        super().__init__(entry)

    def __str__(self) -> str:
        if self.where is None:
            return f'section "{self.entry}" not found'
        return f'key "{self.entry}" not found in [{self.where}]'


class InvalidIniValue(IniError, ValueError):
    """The stored text cannot be read as the requested type."""
    pass


class IniValueOutOfRange(IniError, ValueError):
    """The text is a valid number, but the target type can't hold it."""
    pass
