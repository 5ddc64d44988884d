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
"""fast-version command line."""

import argparse
import logging
import sys
from typing import List, Optional

from . import config
from . import logs
from . import records
from . import version as version_lib
from .version_req import VersionReq

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_INVALID = 2
# Returned by the parse command when the version is malformed.
EXIT_PARSE_ERROR = 1


def _parse_version(text: str, loose: bool) -> Optional[version_lib.Version]:
  mode = config.ParseMode.LOOSE if loose else None
  try:
    return version_lib.parse(text, mode)
  except version_lib.VersionParseError as e:
    logging.error('%s', e)
    return None


def _cmd_parse(args) -> int:
  parsed = _parse_version(args.version, args.loose)
  if parsed is None:
    return EXIT_PARSE_ERROR

  print(parsed)
  return 0


def _cmd_match(args) -> int:
  parsed = _parse_version(args.version, args.loose)
  if parsed is None:
    return EXIT_INVALID

  try:
    variant = records.load_requirement(args.requirement)
  except (OSError, ValueError, RuntimeError):
    # Already logged by the loader.
    return EXIT_INVALID

  req = VersionReq.new(variant)
  logging.debug('Normalized %r to lower %s, higher %s', variant, req.lower,
                req.higher)
  matched = req.matches(parsed)
  print('true' if matched else 'false')
  return EXIT_MATCH if matched else EXIT_NO_MATCH


def main(argv: Optional[List[str]] = None) -> int:
  parser = argparse.ArgumentParser(
      prog='fast-version',
      description='Parse versions and match them against requirements.')
  parser.add_argument(
      '--verbose',
      action=argparse.BooleanOptionalAction,
      dest='verbose',
      default=False,
      help='Log debugging information')
  subparsers = parser.add_subparsers(dest='command', required=True)

  parse_parser = subparsers.add_parser(
      'parse', help='Parse a version and print its canonical form')
  parse_parser.add_argument('version', help='Version string, e.g. 1.2.3')
  parse_parser.set_defaults(func=_cmd_parse)

  match_parser = subparsers.add_parser(
      'match', help='Check a version against a requirement file')
  match_parser.add_argument('version', help='Version string, e.g. 1.2.3')
  match_parser.add_argument(
      'requirement', help='Requirement record (.yaml, .yml or .json)')
  match_parser.set_defaults(func=_cmd_match)

  for subparser in (parse_parser, match_parser):
    subparser.add_argument(
        '--loose',
        action='store_true',
        dest='loose',
        default=False,
        help='Find the version anywhere in the string')

  args = parser.parse_args(argv)
  logs.setup_logging(args.verbose)
  return args.func(args)


if __name__ == '__main__':
  sys.exit(main())
