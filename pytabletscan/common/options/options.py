"""
Licensed to the Apache Software Foundation (ASF) under one
or more contributor license agreements.  See the NOTICE file
distributed with this work for additional information
regarding copyright ownership.  The ASF licenses this file
to you under the Apache License, Version 2.0 (the
"License"); you may not use this file except in compliance
with the License.  You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import Optional

from pytabletscan.common.options.config_option import ConfigOption
from pytabletscan.common.options.options_utils import OptionsUtils


class Options:
    def __init__(self, data: Optional[dict] = None):
        self.data = dict(data) if data else {}

    @classmethod
    def from_none(cls):
        return cls({})

    def to_map(self) -> dict:
        return self.data

    def get(self, key: ConfigOption, default=None):
        """
        Get the value for the given ConfigOption, converted to the option's type.
        Falls back to ``default`` and then to the option's default value.
        """
        raw_value = self.data.get(key.key())
        if raw_value is not None:
            return OptionsUtils.convert_value(raw_value, key.get_clazz())

        return default if default is not None else key.default_value()

    def set(self, key: ConfigOption, value):
        self.data[key.key()] = OptionsUtils.convert_to_string(value)

    def contains(self, key: ConfigOption):
        return key.key() in self.data

    def copy(self) -> 'Options':
        return Options(dict(self.data))

    def merged_with(self, overrides: Optional[dict]) -> 'Options':
        """Returns a copy where the entries of ``overrides`` take precedence."""
        merged = dict(self.data)
        if overrides:
            merged.update(overrides)
        return Options(merged)
