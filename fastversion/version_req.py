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
"""Version requirements.

A requirement is a closed box [lower, higher] over (major, minor, patch).
Containment is tested per component, not lexicographically: a version matches
only if each of its components lies within that component's own bounds. For
example, the requirement built from

  Compound(MinorGreaterEqual(1, 5), MajorLessEqual(2))

has lower (1, 5, 0) and higher (2, MAX, MAX), and does NOT match 2.0.0,
because 0 < 5 on the minor axis. Callers expecting "everything from 1.5.0 up
to 2.x" must account for this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

import attr

from .version import U64_MAX, Version, check_component

Triple = Tuple[int, int, int]

_MIN_TRIPLE = (0, 0, 0)
_MAX_TRIPLE = (U64_MAX, U64_MAX, U64_MAX)


def _inc(value: int) -> int:
  """Saturating increment."""
  return min(value + 1, U64_MAX)


def _dec(value: int) -> int:
  """Saturating decrement."""
  return max(value - 1, 0)


class VersionReqVariant(ABC):
  """How a requirement was expressed by a caller.

  New kinds of requirement can be added by subclassing and implementing
  bounds().
  """

  @abstractmethod
  def bounds(self) -> Tuple[Triple, Triple]:
    """Return the (lower, higher) triples of the normalized box."""


class LowerBound(VersionReqVariant):
  """Greater / GreaterEqual requirements."""

  @abstractmethod
  def lower(self) -> Triple:
    """Lower triple."""

  def bounds(self) -> Tuple[Triple, Triple]:
    return self.lower(), _MAX_TRIPLE


class UpperBound(VersionReqVariant):
  """Less / LessEqual requirements."""

  @abstractmethod
  def higher(self) -> Triple:
    """Higher triple."""

  def bounds(self) -> Tuple[Triple, Triple]:
    return _MIN_TRIPLE, self.higher()


@attr.s(frozen=True)
class _MajorFields:
  major: int = attr.ib(validator=check_component)


@attr.s(frozen=True)
class _MinorFields(_MajorFields):
  minor: int = attr.ib(validator=check_component)


@attr.s(frozen=True)
class _PatchFields(_MinorFields):
  patch: int = attr.ib(validator=check_component)


@attr.s(frozen=True)
class Strict(VersionReqVariant):
  """Exactly one version."""
  version: Version = attr.ib(validator=attr.validators.instance_of(Version))

  def bounds(self) -> Tuple[Triple, Triple]:
    triple = self.version.as_tuple()
    return triple, triple


@attr.s(frozen=True)
class MajorGreater(_MajorFields, LowerBound):

  def lower(self) -> Triple:
    return (_inc(self.major), 0, 0)


@attr.s(frozen=True)
class MinorGreater(_MinorFields, LowerBound):
  """Increments major and minor independently, there is no carry."""

  def lower(self) -> Triple:
    return (_inc(self.major), _inc(self.minor), 0)


@attr.s(frozen=True)
class PatchGreater(_PatchFields, LowerBound):

  def lower(self) -> Triple:
    return (_inc(self.major), _inc(self.minor), _inc(self.patch))


@attr.s(frozen=True)
class MajorGreaterEqual(_MajorFields, LowerBound):

  def lower(self) -> Triple:
    return (self.major, 0, 0)


@attr.s(frozen=True)
class MinorGreaterEqual(_MinorFields, LowerBound):

  def lower(self) -> Triple:
    return (self.major, self.minor, 0)


@attr.s(frozen=True)
class PatchGreaterEqual(_PatchFields, LowerBound):

  def lower(self) -> Triple:
    return (self.major, self.minor, self.patch)


@attr.s(frozen=True)
class MajorLess(_MajorFields, UpperBound):

  def higher(self) -> Triple:
    return (_dec(self.major), U64_MAX, U64_MAX)


@attr.s(frozen=True)
class MinorLess(_MinorFields, UpperBound):

  def higher(self) -> Triple:
    return (_dec(self.major), _dec(self.minor), U64_MAX)


@attr.s(frozen=True)
class PatchLess(_PatchFields, UpperBound):

  def higher(self) -> Triple:
    return (_dec(self.major), _dec(self.minor), _dec(self.patch))


@attr.s(frozen=True)
class MajorLessEqual(_MajorFields, UpperBound):

  def higher(self) -> Triple:
    return (self.major, U64_MAX, U64_MAX)


@attr.s(frozen=True)
class MinorLessEqual(_MinorFields, UpperBound):

  def higher(self) -> Triple:
    return (self.major, self.minor, U64_MAX)


@attr.s(frozen=True)
class PatchLessEqual(_PatchFields, UpperBound):

  def higher(self) -> Triple:
    return (self.major, self.minor, self.patch)


@attr.s(frozen=True)
class Compound(VersionReqVariant):
  """A lower bound and an upper bound, normalized independently."""
  lower: LowerBound = attr.ib(validator=attr.validators.instance_of(LowerBound))
  upper: UpperBound = attr.ib(validator=attr.validators.instance_of(UpperBound))

  def bounds(self) -> Tuple[Triple, Triple]:
    return self.lower.lower(), self.upper.higher()


# Every variant that can appear in a record, keyed by its tag.
VARIANTS = {
    cls.__name__: cls for cls in (
        Strict,
        Compound,
        MajorGreater,
        MinorGreater,
        PatchGreater,
        MajorGreaterEqual,
        MinorGreaterEqual,
        PatchGreaterEqual,
        MajorLess,
        MinorLess,
        PatchLess,
        MajorLessEqual,
        MinorLessEqual,
        PatchLessEqual,
    )
}


@attr.s(frozen=True, hash=True)
class VersionReq:
  """Normalized requirement box.

  The box is not guaranteed to be non-empty: a bound may end up above its
  counterpart (e.g. after saturation), in which case nothing matches on that
  axis.
  """

  major_lower: int = attr.ib(validator=check_component)
  minor_lower: int = attr.ib(validator=check_component)
  patch_lower: int = attr.ib(validator=check_component)
  major_higher: int = attr.ib(validator=check_component)
  minor_higher: int = attr.ib(validator=check_component)
  patch_higher: int = attr.ib(validator=check_component)

  STAR = None  # Set below.

  @classmethod
  def star(cls) -> VersionReq:
    """The unconstrained requirement."""
    return cls.from_bounds(_MIN_TRIPLE, _MAX_TRIPLE)

  @classmethod
  def from_bounds(cls, lower: Triple, higher: Triple) -> VersionReq:
    return cls(*lower, *higher)

  @classmethod
  def new(cls, variant: VersionReqVariant) -> VersionReq:
    """Normalize a requirement variant into a box."""
    if not isinstance(variant, VersionReqVariant):
      raise TypeError(f'Not a requirement variant: {variant!r}')

    return cls.from_bounds(*variant.bounds())

  @property
  def lower(self) -> Triple:
    return (self.major_lower, self.minor_lower, self.patch_lower)

  @property
  def higher(self) -> Triple:
    return (self.major_higher, self.minor_higher, self.patch_higher)

  def matches(self, version: Version) -> bool:
    """Componentwise containment test."""
    lower_match = (
        self.major_lower <= version.major and
        self.minor_lower <= version.minor and
        self.patch_lower <= version.patch)
    higher_match = (
        self.major_higher >= version.major and
        self.minor_higher >= version.minor and
        self.patch_higher >= version.patch)
    return lower_match and higher_match

  def __contains__(self, version: Version) -> bool:
    return self.matches(version)


VersionReq.STAR = VersionReq.star()
