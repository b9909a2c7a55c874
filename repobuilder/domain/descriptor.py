"""
Build descriptor parsing for repobuilder.

A build descriptor (PKGBUILD) is a shell script; repobuilder does not
source it. Only the first top-level `pkgname=` and `pkgver=` assignments
are read, and reading stops as soon as both have been seen. Later
assignments, including ones a pkgver() function would produce at build
time, are ignored.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from ..exit_codes import DescriptorParseError

_ASSIGNMENT = re.compile(r'^(pkgname|pkgver)=(.*)$')

# Quoted word, bare word, array close, or the start of a comment
_TOKEN = re.compile(r'''"([^"]*)"|'([^']*)'|([^\s()#"']+)|(\))|(#)''')


@dataclass(frozen=True)
class BuildDescriptor:
    """Package name and declared version read from a build descriptor."""
    name: str
    version: str

    def full_version(self, release: str = "1") -> str:
        """Version with the build-release suffix, as pacman reports it."""
        return f"{self.version}-{release}"


def _tokens(text: str) -> Iterator[Tuple[str, str]]:
    """Yield ('word', value) and ('close', ')') tokens up to a comment."""
    for match in _TOKEN.finditer(text):
        double, single, bare, close, comment = match.groups()
        if comment:
            return
        if close:
            yield 'close', close
        else:
            yield 'word', next(v for v in (double, single, bare) if v is not None)


def _scalar(value: str) -> str:
    for kind, word in _tokens(value):
        return word if kind == 'word' else ''
    return ''


def _first_array_item(rest: str, lines: Iterator[str]) -> str:
    """First element of an array whose body may continue on later lines."""
    text: Optional[str] = rest
    while text is not None:
        for kind, word in _tokens(text):
            return word if kind == 'word' else ''
        text = next(lines, None)
    return ''


def _value(raw: str, lines: Iterator[str]) -> str:
    raw = raw.strip()
    # Split packages declare an array; the first entry names the build
    if raw.startswith('('):
        return _first_array_item(raw[1:], lines)
    return _scalar(raw)


def parse_descriptor_lines(lines: Iterable[str], source: str = "<descriptor>") -> BuildDescriptor:
    """
    Extract the declared name and version from descriptor lines.

    Raises:
        DescriptorParseError: if either field is missing or empty
    """
    name: Optional[str] = None
    version: Optional[str] = None

    lines = iter(lines)
    for line in lines:
        match = _ASSIGNMENT.match(line.strip())
        if not match:
            continue
        key, value = match.group(1), _value(match.group(2), lines)
        if key == 'pkgname' and name is None:
            name = value
        elif key == 'pkgver' and version is None:
            version = value
        if name is not None and version is not None:
            break

    missing = [field for field, value in (('pkgname', name), ('pkgver', version)) if not value]
    if missing:
        raise DescriptorParseError(
            f"{source}: missing {' and '.join(missing)}",
            path=source,
        )

    return BuildDescriptor(name=name, version=version)


def parse_descriptor(path: Union[str, Path]) -> BuildDescriptor:
    """
    Read and parse a build descriptor file.

    Raises:
        DescriptorParseError: if the file is unreadable or incomplete
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return parse_descriptor_lines(f, source=str(path))
    except OSError as e:
        raise DescriptorParseError(f"{path}: cannot read descriptor ({e})", path=str(path)) from e
