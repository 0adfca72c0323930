#!/usr/bin/env python
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import setuptools

project = 'ironfish'

setuptools.setup(
    name=project,
    version='1.2.1',
    description='Uniform Redfish client for service processors of '
                'different vendors',
    classifiers=[
        'Intended Audience :: Information Technology',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        ],
    packages=setuptools.find_packages(),
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'oslo.config>=6.8.0',
        'oslo.i18n>=3.15.3',
        'oslo.log>=4.3.0',
        'oslo.serialization>=2.18.0',
        'oslo.utils>=4.5.0',
        'requests>=2.14.2',
        'rfc3986>=1.2.0',
        ],
    extras_require={
        'test': [
            'fixtures>=3.0.0',
            'oslotest>=3.2.0',
            'stestr>=2.0.0',
            'testtools>=2.2.0',
            'pytest',
            ],
        },
    entry_points={
        'oslo.config.opts': [
            'ironfish = ironfish.conf.opts:list_opts',
            ],
        },
)
