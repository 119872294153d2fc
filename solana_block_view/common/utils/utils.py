from __future__ import annotations

import functools

from enum import Enum
from typing import Dict, Any, Tuple, Union, Sequence

from ..config import Config


_config = Config()
LOG_FULL_OBJECT_INFO = _config.log_full_object_info
LOG_OBJECT_INFO_LIMIT = _config.log_object_info_limit


def cached_method(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        self = args[0]
        try:
            return getattr(self, wrapper._cached_value_name)
        except AttributeError:
            pass

        value = func(*args, **kwargs)
        object.__setattr__(self, wrapper._cached_value_name, value)
        return value

    def reset_cache(self):
        if hasattr(self, wrapper._cached_value_name):
            object.__delattr__(self, wrapper._cached_value_name)

    wrapper._cached_value_name = '_cached_' + wrapper.__name__
    wrapper.reset_cache = reset_cache
    return wrapper


cached_property = functools.cached_property


@functools.lru_cache(maxsize=None)
def str_enum(value: Enum) -> str:
    value = str(value)
    idx = value.find('.')
    if idx != -1:
        value = value[idx + 1:]
    return value


def str_fmt_object(obj: Any, skip_underling=True, name='') -> str:
    """Compact one-line representation of a record, used by __str__ of the block records"""

    def _decode_name(value: Any) -> str:
        return type(value).__name__

    def _lookup_bytes_as_value(value: Union[str, bytes, bytearray]) -> Tuple[bool, str]:
        if (not LOG_FULL_OBJECT_INFO) and (len(value) == 0):
            return False, '?'

        if isinstance(value, (bytes, bytearray)):
            value = value.hex()
        if (not LOG_FULL_OBJECT_INFO) and (len(value) > 20):
            value = value[:20] + '...'
        return True, "'" + value + "'"

    def _lookup_seq_as_value(value_list: Sequence[Any]) -> Tuple[bool, str]:
        value_list_type = type(value_list).__name__

        if LOG_FULL_OBJECT_INFO:
            item_list = list()
            for item in value_list:
                has_item, item = _decode_value(item)
                item_list.append(item if has_item else '?...')
            return True, value_list_type + '([' + ', '.join(item_list) + '])'

        elif len(value_list) == 0:
            return False, '?'

        return True, value_list_type + '(len=' + str(len(value_list)) + ', [...])'

    def _decode_value(value: Any) -> Tuple[bool, str]:
        if value is None:
            if LOG_FULL_OBJECT_INFO:
                return True, 'None'
        elif isinstance(value, bool):
            if value or LOG_FULL_OBJECT_INFO:
                return True, str(value)
        elif isinstance(value, Enum):
            return True, str_enum(value)
        elif isinstance(value, (list, tuple, set)):
            return _lookup_seq_as_value(value)
        elif isinstance(value, (str, bytes, bytearray)):
            return _lookup_bytes_as_value(value)
        elif isinstance(value, dict):
            return True, 'dict(len=' + str(len(value)) + ')'
        else:
            value = str(value)
            if LOG_FULL_OBJECT_INFO or (len(value) > 0):
                return True, value
        return False, '?'

    def _lookup_dict(d: Dict[str, Any]) -> str:
        idx = 0
        result = ''
        for key, value in d.items():
            if skip_underling and key.startswith('_'):
                continue

            has_value, value = _decode_value(value)
            if not has_value:
                continue

            if idx > 0:
                result += ', '
            result += key.strip('_') + '=' + value
            idx += 1
            if (not LOG_FULL_OBJECT_INFO) and (idx >= LOG_OBJECT_INFO_LIMIT):
                break
        return result

    if len(name) == 0:
        name = _decode_name(obj)

    if isinstance(obj, dict):
        content = _lookup_dict(obj)
    elif hasattr(obj, '__dataclass_fields__'):
        content = _lookup_dict({key: getattr(obj, key) for key in obj.__dataclass_fields__})
    elif hasattr(obj, '__dict__'):
        content = _lookup_dict(obj.__dict__)
    else:
        content = ''

    return name + '(' + content + ')'


def get_from_dict(src: Dict, path: Tuple[Any, ...], default_value: Any) -> Any:
    """Provides smart getting values from python dictionary"""
    value = src
    for key in path:
        if isinstance(value, dict):
            value = value.get(key, None)
        elif isinstance(value, list) and isinstance(key, int) and (0 <= key < len(value)):
            value = value[key]
        else:
            return default_value

        if value is None:
            return default_value
    return value
