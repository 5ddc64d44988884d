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
"""Plain record (dict) representations of versions and requirements.

Records map field-for-field onto the Python types. Variants are tagged by
their class name:

  {'MajorGreaterEqual': {'major': 1}}
  {'Strict': {'major': 1, 'minor': 2, 'patch': 3}}
  {'Compound': [{'MinorGreaterEqual': {'major': 1, 'minor': 5}},
                {'MajorLess': {'major': 2}}]}
"""

import functools
import json
import logging
import os
from typing import Any, Dict, Type

import attr
import jsonschema
import yaml

from . import version_req
from .version import Version
from .version_req import Compound, Strict, VersionReq, VersionReqVariant

YAML_EXTENSIONS = ('.yaml', '.yml')
JSON_EXTENSIONS = ('.json',)


class RecordError(ValueError):
  """A record does not describe a valid value."""


class NoDatesSafeLoader(yaml.SafeLoader):
  """
  Safe YAML loader that removes datetime autoparsing

  PyYAML parses date-like scalars into datetime objects, which would then
  fail schema validation with a confusing type error.
  """

  @classmethod
  def remove_implicit_resolver(cls: Type['NoDatesSafeLoader'],
                               tag_to_remove: str) -> None:
    """
    Remove implicit resolvers for a particular tag

    Takes care not to modify resolvers in super classes.
    """
    if 'yaml_implicit_resolvers' not in cls.__dict__:
      cls.yaml_implicit_resolvers = cls.yaml_implicit_resolvers.copy()

    for first_letter, mappings in list(cls.yaml_implicit_resolvers.items()):
      cls.yaml_implicit_resolvers[first_letter] = [
          (tag, regexp) for tag, regexp in mappings if tag != tag_to_remove
      ]


NoDatesSafeLoader.remove_implicit_resolver('tag:yaml.org,2002:timestamp')


@functools.lru_cache(maxsize=None)
def load_schema() -> Dict[str, Any]:
  path = os.path.join(
      os.path.dirname(os.path.abspath(__file__)), 'schema.json')
  with open(path, 'r') as schema_file:
    return json.load(schema_file)


def _is_integer(checker, instance) -> bool:
  """Integers only: draft-07 would also accept floats such as 1.0."""
  del checker
  return isinstance(instance, int) and not isinstance(instance, bool)


_RecordValidator = jsonschema.validators.extend(
    jsonschema.Draft7Validator,
    type_checker=jsonschema.Draft7Validator.TYPE_CHECKER.redefine(
        'integer', _is_integer))


def validate(data: Any, definition: str = 'variant') -> None:
  """Validate a record against one of the schema definitions.

  Raises:
    RecordError: the record is invalid.
  """
  schema = {
      '$schema': load_schema()['$schema'],
      'allOf': [{
          '$ref': f'#/definitions/{definition}'
      }],
      'definitions': load_schema()['definitions'],
  }
  try:
    jsonschema.validate(data, schema, cls=_RecordValidator)
  except jsonschema.exceptions.ValidationError as e:
    logging.warning('Failed to validate %s record: %s', definition, e.message)
    raise RecordError(f'Invalid {definition} record: {e.message}') from e


def version_to_dict(version: Version) -> Dict[str, int]:
  return attr.asdict(version)


def version_from_dict(data: Dict[str, Any]) -> Version:
  validate(data, 'version')
  return Version(**data)


def version_req_to_dict(req: VersionReq) -> Dict[str, int]:
  return attr.asdict(req)


def version_req_from_dict(data: Dict[str, Any]) -> VersionReq:
  validate(data, 'version_req')
  return VersionReq(**data)


def variant_to_dict(variant: VersionReqVariant) -> Dict[str, Any]:
  """Convert a requirement variant into a tagged record."""
  name = variant.__class__.__name__
  if version_req.VARIANTS.get(name) is not variant.__class__:
    raise TypeError(f'No record form for {name}')

  if isinstance(variant, Strict):
    return {name: version_to_dict(variant.version)}

  if isinstance(variant, Compound):
    return {
        name: [variant_to_dict(variant.lower),
               variant_to_dict(variant.upper)]
    }

  return {name: attr.asdict(variant)}


def _build_variant(data: Dict[str, Any]) -> VersionReqVariant:
  """Build a variant from an already validated record."""
  ((name, fields),) = data.items()
  cls = version_req.VARIANTS[name]
  if cls is Strict:
    return Strict(Version(**fields))

  if cls is Compound:
    lower, upper = fields
    return Compound(_build_variant(lower), _build_variant(upper))

  return cls(**fields)


def variant_from_dict(data: Dict[str, Any]) -> VersionReqVariant:
  """Convert a tagged record into a requirement variant.

  Raises:
    RecordError: the record is invalid.
  """
  validate(data)
  return _build_variant(data)


def load_requirement_from_data(text: str,
                               extension: str) -> VersionReqVariant:
  """Load a requirement variant from YAML or JSON text."""
  data: Any
  if extension in YAML_EXTENSIONS:
    data = yaml.load(text, Loader=NoDatesSafeLoader)
  elif extension in JSON_EXTENSIONS:
    data = json.loads(text)
  else:
    raise RuntimeError('Unknown format ' + extension)

  return variant_from_dict(data)


def load_requirement(path: str) -> VersionReqVariant:
  """Load a requirement variant from a YAML or JSON file."""
  ext = os.path.splitext(path)[1]
  try:
    with open(path) as f:
      return load_requirement_from_data(f.read(), ext)
  except (OSError, ValueError, RuntimeError, yaml.YAMLError) as e:
    logging.error('Failed to load requirement file %s: %s', path, e)
    raise


def dump_requirement(variant: VersionReqVariant, path: str) -> None:
  """Write a requirement variant to a YAML or JSON file."""
  data = variant_to_dict(variant)
  ext = os.path.splitext(path)[1]
  if ext not in YAML_EXTENSIONS + JSON_EXTENSIONS:
    raise RuntimeError('Unknown format ' + ext)

  with open(path, 'w') as f:
    if ext in YAML_EXTENSIONS:
      yaml.safe_dump(data, f, sort_keys=False)
    else:
      json.dump(data, f, indent=2)
      f.write('\n')
