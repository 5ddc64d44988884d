# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Three component version identifiers."""

from __future__ import annotations

import functools
import re
from typing import Optional, Tuple

import attr
import semver

from . import config

U64_MAX = 2**64 - 1

_DIGITS = re.compile(r'[0-9]+')
# Used by the loose strategy, which tolerates surrounding text.
_LOOSE_VERSION = re.compile(
    r'(?P<major>[0-9]+)(?:\.(?P<minor>[0-9]+)(?:\.(?P<patch>[0-9]+))?)?')


class VersionParseError(ValueError):
  """Base class for version parsing errors."""
  message = 'Version could not be parsed'

  def __init__(self, text: str) -> None:
    super().__init__(f'{self.message}: {text!r}')
    self.text = text


class FormatWrongError(VersionParseError):
  message = 'Format of version string is wrong'


class MajorParseError(VersionParseError):
  message = 'Parsing error in major'


class MinorParseError(VersionParseError):
  message = 'Parsing error in minor'


class PatchParseError(VersionParseError):
  message = 'Parsing error in patch'


class MajorNotFoundError(VersionParseError):
  message = 'Major element was not found'


class MinorNotFoundError(VersionParseError):
  message = 'Minor element was not found'


class PatchNotFoundError(VersionParseError):
  message = 'Patch element was not found'


def check_component(instance, attribute, value):
  """attrs validator for unsigned 64-bit version components."""
  del instance

  # bool is an int subclass, but True is not a version component.
  if not isinstance(value, int) or isinstance(value, bool):
    raise TypeError(f'{attribute.name} must be an int, got {value!r}')

  if not 0 <= value <= U64_MAX:
    raise ValueError(f'{attribute.name} out of range: {value}')


@attr.s(frozen=True, order=True, hash=True)
class Version:
  """Version in a SemVer like way: major.minor.patch with no suffixes.

  Ordering is lexicographic over (major, minor, patch).

  >>> Version.from_str('1.2.3') < Version(1, 10, 0)
  True
  >>> str(Version(1, 2, 3))
  '1.2.3'
  """

  major: int = attr.ib(validator=check_component)
  minor: int = attr.ib(validator=check_component)
  patch: int = attr.ib(validator=check_component)

  def __str__(self) -> str:
    return f'{self.major}.{self.minor}.{self.patch}'

  def as_tuple(self) -> Tuple[int, int, int]:
    """Return (major, minor, patch)."""
    return (self.major, self.minor, self.patch)

  @classmethod
  def from_str(cls, text: str) -> Version:
    """Parse a version string with the strict strategy."""
    return _parse_strict(text)

  @classmethod
  def from_semver(cls, version: semver.Version) -> Version:
    """Convert a semver.Version without prerelease or build metadata."""
    if version.prerelease or version.build:
      raise ValueError(
          f'Pre-release and build metadata are not supported: {version}')

    return cls(version.major, version.minor, version.patch)

  def to_semver(self) -> semver.Version:
    return semver.Version(self.major, self.minor, self.patch)


def _parse_component(text: str, field: str, error_cls) -> int:
  """Parse a single decimal u64 component."""
  # int() alone would also accept signs, whitespace, underscores and
  # non-ASCII digits.
  if not _DIGITS.fullmatch(field):
    raise error_cls(text)

  value = int(field)
  if value > U64_MAX:
    raise error_cls(text)

  return value


def _parse_strict(text: str) -> Version:
  """Parse exactly three dot-separated fields."""
  fields = text.split('.')
  if len(fields) != 3:
    raise FormatWrongError(text)

  major = _parse_component(text, fields[0], MajorParseError)
  minor = _parse_component(text, fields[1], MinorParseError)
  patch = _parse_component(text, fields[2], PatchParseError)
  return Version(major, minor, patch)


def _parse_loose(text: str) -> Version:
  """Parse the first version-looking run of digits in the string."""
  match = _LOOSE_VERSION.search(text)
  if not match:
    raise MajorNotFoundError(text)
  if match.group('minor') is None:
    raise MinorNotFoundError(text)
  if match.group('patch') is None:
    raise PatchNotFoundError(text)

  major = _parse_component(text, match.group('major'), MajorParseError)
  minor = _parse_component(text, match.group('minor'), MinorParseError)
  patch = _parse_component(text, match.group('patch'), PatchParseError)
  return Version(major, minor, patch)


_PARSERS = {
    config.ParseMode.STRICT: _parse_strict,
    config.ParseMode.LOOSE: _parse_loose,
}


def parse(text: str, mode: Optional[config.ParseMode] = None) -> Version:
  """Parse a version string.

  Args:
    text: the version string, e.g. '1.2.3'.
    mode: the parsing strategy. Defaults to config.parse_mode, which is
      ParseMode.STRICT unless changed with config.set_parse_mode().

  Returns:
    The parsed Version.

  Raises:
    VersionParseError: a subclass describing the first problem found.
  """
  if mode is None:
    mode = config.parse_mode

  return _PARSERS[config.ParseMode(mode)](text)


@functools.lru_cache(maxsize=None)
def version_literal(text: str) -> Version:
  """Parse a version literal, for use in module level constants.

  A malformed literal raises at import time of the defining module:

    MINIMUM_VERSION = version_literal('1.2.3')
  """
  return _parse_strict(text)
