# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/13 17:20:33
# @Author : Kariko Lin

"""
INI document: ordinary sections, plus two reserved partitions.

    ```ini
    key = val      ; before any header, goes to `Config.globals`.

    [DEFAULTS]     ; `Config.defaults`, the fallback of every section.
    timeout = 30

    [server]
    host = example.org
    ```

`cfg.get('server', 'timeout')` gives `'30'` as the section lacks it.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from os import PathLike
from types import MappingProxyType
from typing import Any
from warnings import warn

from .consts import SECTION_END, SECTION_START, Reserved
from .options import ParserOptions
from .values import converter_for, converter_of

logger = logging.getLogger(__name__)

# rw-r-- plus owner x, as the original tool saved.
DEFAULT_PERMISSIONS = 0o764


class ConfigSection(MutableMapping[str, str]):
    """INI 小节：标题加上一组有序、不重复的键值对。

    相等性只比较键值对，不比较标题。
    """

    def __init__(
        self, title: str = '', data: Mapping[str, str] | None = None
    ) -> None:
        self.title = title
        self._data: dict[str, str] = {}
        if data:
            self._data.update(data)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f'[{self.title}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.title, len(self._data))

    def copy(self) -> 'ConfigSection':
        return ConfigSection(self.title, self._data)

    def get(self, key: str, converter: Any = str, default: Any = None) -> Any:
        """Typed read. `default` only covers a *missing* key,
        a malformed value raises `InvalidValue`."""
        if key not in self._data:
            return default
        return converter_for(converter).from_value(self._data[key])

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        return self.get(key, bool, default)

    def get_int(
        self, key: str, default: int | None = None, *, width: str = 'int'
    ) -> int | None:
        """`width` is a converter name, like `'uint16'`."""
        return self.get(key, width, default)

    def get_float(
        self, key: str, default: float | None = None
    ) -> float | None:
        return self.get(key, float, default)

    def get_list(
        self, key: str, element: Any = str, default: list | None = None
    ) -> list | None:
        return self.get(key, list[element], default)

    def set(self, key: str, value: Any) -> None:
        """Typed write, the value is stored as its text form."""
        self._data[key] = (
            value if isinstance(value, str)
            else converter_of(value).to_value(value)
        )

    def _dump(self, separator: str, *, header: bool = True) -> str:
        ret = f'{SECTION_START}{self.title}{SECTION_END}\n' if header else ''
        for k, v in self._data.items():
            ret += f'{k} {separator} {v}\n'
        return ret


class Config(MutableMapping[str, ConfigSection]):
    """A whole INI document.

    Mapping access covers ordinary sections only, however reading or
    assigning `GLOBALS` / `DEFAULTS` routes to the reserved partitions.
    Nothing is locked, share it across threads at your own risk.
    """

    def __init__(
        self,
        sections: Mapping[str, Mapping[str, str]]
        | Iterable[ConfigSection] | None = None
    ) -> None:
        self.__globals = ConfigSection(Reserved.GLOBALS.value)
        self.__defaults = ConfigSection(Reserved.DEFAULTS.value)
        self.__raw: dict[str, ConfigSection] = {}
        if sections is None:
            return
        if isinstance(sections, Mapping):
            for k, v in sections.items():
                self[k] = v
        else:
            for i in sections:
                self[i.title] = i

    @property
    def globals(self) -> ConfigSection:
        """不属于任何小节的游离键值对。"""
        return self.__globals

    @globals.setter
    def globals(self, value: Mapping[str, str]) -> None:
        self[Reserved.GLOBALS.value] = value

    @property
    def defaults(self) -> ConfigSection:
        return self.__defaults

    @defaults.setter
    def defaults(self, value: Mapping[str, str]) -> None:
        self[Reserved.DEFAULTS.value] = value

    @property
    def sections(self) -> Mapping[str, ConfigSection]:
        """Read-only view of the ordinary sections, in insertion order."""
        return MappingProxyType(self.__raw)

    def __reserved(self, title: str) -> ConfigSection | None:
        if title == Reserved.GLOBALS:
            return self.__globals
        if title == Reserved.DEFAULTS:
            return self.__defaults
        return None

    def __getitem__(self, title: str) -> ConfigSection:
        if (ret := self.__reserved(title)) is not None:
            return ret
        return self.__raw[title]

    def __setitem__(
        self, title: str, value: ConfigSection | Mapping[str, str]
    ) -> None:
        if (
            isinstance(value, ConfigSection)
            and value.title and value.title != title
        ):
            warn(f'小节 [{value.title}] 以 "{title}" 为标题存入，已改名。')
        if (target := self.__reserved(title)) is not None:
            # reserved partitions are kept, only contents get replaced.
            items = dict(value)
            target.clear()
            target.update(items)
            return
        # shouldn't keep ptr to external dict in key setting operation.
        self.__raw[title] = ConfigSection(title, value)

    def __delitem__(self, title: str) -> None:
        if (target := self.__reserved(title)) is not None:
            target.clear()
            return
        del self.__raw[title]

    def __contains__(self, title: object) -> bool:
        return title in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Config):
            return NotImplemented
        return (
            self.__globals == other.globals
            and self.__defaults == other.defaults
            and self.__raw == dict(other.sections)
        )

    def __repr__(self) -> str:
        return '<Config globals=%d defaults=%d sections=%r>' % (
            len(self.__globals), len(self.__defaults), list(self.__raw))

    def setdefault(  # type: ignore[override]
        self, title: str, default: Mapping[str, str] | None = None
    ) -> ConfigSection:
        """Get the section, create it first if there's not."""
        if (ret := self.__reserved(title)) is not None:
            return ret
        if title not in self.__raw:
            self.__raw[title] = ConfigSection(title, default)
        return self.__raw[title]

    def pop(self, title: str, *default: Any) -> Any:  # type: ignore[override]
        """For `GLOBALS` / `DEFAULTS`, hand out a copy then clear the
        partition, as the partition object itself lives on."""
        if (target := self.__reserved(title)) is not None:
            ret = target.copy()
            target.clear()
            return ret
        return super().pop(title, *default)

    def clear(self) -> None:
        self.__globals.clear()
        self.__defaults.clear()
        self.__raw.clear()

    def section(self, title: str) -> ConfigSection | None:
        if (ret := self.__reserved(title)) is not None:
            return ret
        return self.__raw.get(title)

    def lookup(self, section: str | None, key: str) -> str | None:
        """Resolve the raw text of `key`.

        Order: the named section (globals if `section` is None),
        then defaults. `None` means absent, which is not `''`.
        """
        target = self.section(
            Reserved.GLOBALS.value if section is None else section)
        if target is not None and key in target:
            return target[key]
        return self.__defaults._data.get(key)

    def get(  # type: ignore[override]
        self,
        section: str | None,
        key: str,
        converter: Any = str,
        default: Any = None
    ) -> Any:
        """Resolved, typed read, see `lookup()` for the order.

        `default` is returned only if the key can't be found anywhere.
        """
        if (raw := self.lookup(section, key)) is None:
            return default
        return converter_for(converter).from_value(raw)

    def set(self, section: str | None, key: str, value: Any) -> None:
        """Store a value, creating the section if needed.
        `value=None` removes the key from that very section."""
        title = Reserved.GLOBALS.value if section is None else section
        if value is None:
            if (target := self.section(title)) is not None:
                target.pop(key, None)
            return
        self.setdefault(title).set(key, value)

    def get_global(self, key: str) -> str | None:
        return self.__globals._data.get(key)

    def get_default(self, key: str) -> str | None:
        return self.__defaults._data.get(key)

    def output(self, options: ParserOptions | None = None) -> str:
        """Dump as INI text. Values are written as stored, unquoted."""
        sep = (options or ParserOptions.DEFAULT).separator
        chunks: list[str] = []
        if self.__globals:
            chunks.append(self.__globals._dump(sep, header=False))
        if self.__defaults:
            chunks.append(self.__defaults._dump(sep))
        for i in self.__raw.values():
            chunks.append(i._dump(sep))
        # each chunk ends with '\n', so this leaves one blank line between.
        return '\n'.join(chunks)

    def __str__(self) -> str:
        return self.output()

    @classmethod
    def from_file(
        cls, path: str | PathLike[str], options: ParserOptions | None = None
    ) -> 'Config':
        from .parser import read_document
        return read_document(path, options)

    def save(
        self,
        path: str | PathLike[str],
        options: ParserOptions | None = None,
        permissions: int = DEFAULT_PERMISSIONS
    ) -> None:
        from .parser import IniParser
        IniParser(path, options).write(self, permissions=permissions)
