################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################
import json
from dataclasses import field, fields, is_dataclass
from typing import Any, List, Type, TypeVar, Union

T = TypeVar("T")


def json_field(json_name: str, **kwargs):
    """Create a dataclass field serialized under a custom JSON name."""
    return field(metadata={"json_name": json_name}, **kwargs)


class JSON:

    @staticmethod
    def from_json(json_str: str, target_class: Type[T]) -> T:
        return JSON.from_dict(json.loads(json_str), target_class)

    @staticmethod
    def from_dict(data: Any, target_class: Type[T]) -> T:
        if hasattr(target_class, "from_dict") and callable(getattr(target_class, "from_dict")):
            return target_class.from_dict(data)

        kwargs = {}
        by_json_name = {f.metadata.get("json_name", f.name): f for f in fields(target_class)}
        for json_name, value in data.items():
            field_info = by_json_name.get(json_name)
            if field_info is None:
                continue
            kwargs[field_info.name] = JSON._convert(value, field_info.type)
        return target_class(**kwargs)

    @staticmethod
    def _convert(value: Any, field_type: Any) -> Any:
        if value is None:
            return None
        origin = getattr(field_type, "__origin__", None)
        args = getattr(field_type, "__args__", None) or ()
        # Optional[X]
        if origin is Union and len(args) == 2 and type(None) in args:
            inner = args[0] if args[1] is type(None) else args[1]
            return JSON._convert(value, inner)
        if origin in (list, List) and args:
            return [JSON._convert(item, args[0]) for item in value]
        if isinstance(field_type, type) and (
                is_dataclass(field_type) or hasattr(field_type, "from_dict")):
            return JSON.from_dict(value, field_type)
        return value
