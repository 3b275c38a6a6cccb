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

from enum import Enum
from typing import Any, Type


class OptionsUtils:
    """Utility methods for options conversion."""

    @staticmethod
    def convert_value(value: Any, target_type: Type) -> Any:
        """
        Convert a raw option value to the target type.

        Raises:
            ValueError: If the conversion is not possible
        """
        if value is None:
            return None

        if isinstance(target_type, type) and issubclass(target_type, Enum):
            return OptionsUtils.convert_to_enum(value, target_type)

        # bool is a subclass of int, check it before the isinstance shortcut
        if target_type == bool:
            return OptionsUtils.convert_to_boolean(value)
        if isinstance(value, target_type):
            return value
        if target_type == str:
            return OptionsUtils.convert_to_string(value)
        elif target_type == int:
            return OptionsUtils.convert_to_int(value)
        else:
            raise ValueError(f"Unsupported type: {target_type}")

    @staticmethod
    def convert_to_string(value: Any) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, Enum):
            return str(value.value)
        return str(value)

    @staticmethod
    def convert_to_boolean(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lower_value = value.lower().strip()
            if lower_value in ('true', '1', 'yes', 'on'):
                return True
            elif lower_value in ('false', '0', 'no', 'off'):
                return False
            else:
                raise ValueError(f"Cannot convert '{value}' to boolean")
        elif isinstance(value, (int, float)):
            return bool(value)
        else:
            raise ValueError(f"Cannot convert {type(value)} to boolean")

    @staticmethod
    def convert_to_int(value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("Cannot convert bool to int")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            return int(value.strip())
        if isinstance(value, float):
            return int(value)
        raise ValueError(f"Cannot convert {type(value)} to int")

    @staticmethod
    def convert_to_enum(value: Any, enum_class: Type[Enum]) -> Enum:
        if isinstance(value, enum_class):
            return value

        if isinstance(value, str):
            value_lower = value.lower().strip()
            for enum_member in enum_class:
                if str(enum_member.value).lower() == value_lower:
                    return enum_member
            try:
                return enum_class[value.strip().upper()]
            except KeyError:
                raise ValueError(
                    f"Cannot convert '{value}' to {enum_class.__name__}. "
                    f"Valid values: {[e.value for e in enum_class]}"
                )
        raise ValueError(f"Cannot convert {type(value)} to {enum_class.__name__}")
