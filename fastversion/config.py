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
"""Parsing configuration."""

import enum


class ParseMode(enum.Enum):
  """Version string parsing strategies."""
  # Exactly three dot-separated decimal fields and nothing else.
  STRICT = 'strict'
  # First major[.minor[.patch]] run found anywhere in the string.
  LOOSE = 'loose'


# Used by version.parse() when no explicit mode is given.
parse_mode = ParseMode.STRICT


def set_parse_mode(mode: ParseMode):
  """Sets the default parse mode."""
  global parse_mode
  parse_mode = ParseMode(mode)
