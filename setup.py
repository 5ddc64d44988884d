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
"""setup.py for fast-version."""
import setuptools

with open('README.md', 'r') as fh:
  long_description = fh.read()

setuptools.setup(
    name='fast-version',
    version='0.1.0',
    author='fast-version authors',
    description='SemVer like versions and allocation-free version requirements',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(include=['fastversion']),
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
    ],
    install_requires=[
        'attrs',
        'jsonschema',
        'PyYAML',
        'semver>=3.0.0',
    ],
    package_data={
        # Include the record JSON schema.
        '': ['*.json'],
    },
    entry_points={
        'console_scripts': ['fast-version=fastversion.cli:main'],
    },
    python_requires='>=3.9',
    zip_safe=False,
)
