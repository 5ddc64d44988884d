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
"""Allocation-free SemVer like versions and version requirements."""

from .config import ParseMode, set_parse_mode
from .version import (U64_MAX, FormatWrongError, MajorNotFoundError,
                      MajorParseError, MinorNotFoundError, MinorParseError,
                      PatchNotFoundError, PatchParseError, Version,
                      VersionParseError, parse, version_literal)
from .version_req import (Compound, LowerBound, MajorGreater,
                          MajorGreaterEqual, MajorLess, MajorLessEqual,
                          MinorGreater, MinorGreaterEqual, MinorLess,
                          MinorLessEqual, PatchGreater, PatchGreaterEqual,
                          PatchLess, PatchLessEqual, Strict, UpperBound,
                          VersionReq, VersionReqVariant)
