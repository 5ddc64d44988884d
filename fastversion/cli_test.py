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
"""Command line tests."""

import contextlib
import io
import logging
import os
import tempfile
import unittest
from unittest import mock

from . import cli
from . import logs
from . import records
from .version_req import Compound, MajorLessEqual, MinorGreaterEqual


class CliTest(unittest.TestCase):
  """Command line tests."""

  def setUp(self):
    patcher = mock.patch.object(logs, 'setup_logging')
    self.mock_setup_logging = patcher.start()
    self.addCleanup(patcher.stop)

    self.tmp_dir = tempfile.TemporaryDirectory()
    self.addCleanup(self.tmp_dir.cleanup)
    self.req_path = os.path.join(self.tmp_dir.name, 'req.yaml')
    records.dump_requirement(
        Compound(MinorGreaterEqual(1, 5), MajorLessEqual(2)), self.req_path)

  def _run(self, *argv):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
      status = cli.main(list(argv))
    return status, out.getvalue()

  def test_parse(self):
    """Test the parse command."""
    self.assertEqual((0, '1.2.3\n'), self._run('parse', '01.2.3'))
    self.assertEqual((0, '1.2.3\n'), self._run('parse', 'v1.2.3', '--loose'))
    self.mock_setup_logging.assert_called_with(False)

    with self.assertLogs(level='ERROR') as cm:
      self.assertEqual((1, ''), self._run('parse', '1.2'))
    self.assertIn('Format of version string is wrong', cm.output[0])

  def test_match(self):
    """Test the match command."""
    self.assertEqual((cli.EXIT_MATCH, 'true\n'),
                     self._run('match', '1.7.0', self.req_path))
    self.assertEqual((cli.EXIT_NO_MATCH, 'false\n'),
                     self._run('match', '2.0.0', self.req_path))
    self.assertEqual((cli.EXIT_MATCH, 'true\n'),
                     self._run('--verbose', 'match', 'v2.5.0', self.req_path,
                               '--loose'))
    self.mock_setup_logging.assert_called_with(True)

  def test_match_invalid(self):
    """Test the match command with bad input."""
    with self.assertLogs(level='ERROR'):
      self.assertEqual((cli.EXIT_INVALID, ''),
                       self._run('match', 'v2.5.0', self.req_path))

    missing = os.path.join(self.tmp_dir.name, 'missing.json')
    with self.assertLogs(level='ERROR'):
      self.assertEqual((cli.EXIT_INVALID, ''),
                       self._run('match', '1.2.3', missing))

    unknown = os.path.join(self.tmp_dir.name, 'req.txt')
    with open(unknown, 'w') as f:
      f.write('MajorGreater: {major: 1}\n')
    with self.assertLogs(level='ERROR') as cm:
      self.assertEqual((cli.EXIT_INVALID, ''),
                       self._run('match', '1.2.3', unknown))
    self.assertIn('Unknown format .txt', cm.output[0])

    float_path = os.path.join(self.tmp_dir.name, 'float.yaml')
    with open(float_path, 'w') as f:
      f.write('MajorGreater: {major: 1.0}\n')
    with self.assertLogs(level='ERROR'):
      self.assertEqual((cli.EXIT_INVALID, ''),
                       self._run('match', '1.2.3', float_path))

  def test_usage(self):
    """Test that a command is required."""
    with contextlib.redirect_stderr(io.StringIO()):
      with self.assertRaises(SystemExit):
        cli.main([])


class LogsTest(unittest.TestCase):
  """Logging setup tests."""

  def setUp(self):
    root = logging.getLogger()
    self.addCleanup(root.setLevel, root.level)

  @mock.patch('logging.basicConfig')
  def test_setup_logging(self, mock_basic_config):
    """Test log levels."""
    logs.setup_logging()
    mock_basic_config.assert_called_once_with(format=mock.ANY, force=True)
    self.assertEqual(logging.INFO, logging.getLogger().level)

    logs.setup_logging(verbose=True)
    self.assertEqual(logging.DEBUG, logging.getLogger().level)


if __name__ == '__main__':
  unittest.main()
