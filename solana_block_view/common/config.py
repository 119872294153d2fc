import os
import logging

from decimal import Decimal
from typing import Optional, Union, Dict, Any

LOG = logging.getLogger(__name__)


class Config:
    _log_level_list = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')

    def __init__(self):
        self._log_level = self._env_log_level('LOG_LEVEL', 'WARNING')
        self._log_json_format = self._env_bool('LOG_JSON_FORMAT', False)
        self._log_full_object_info = self._env_bool('LOG_FULL_OBJECT_INFO', False)
        self._log_object_info_limit = self._env_num('LOG_OBJECT_INFO_LIMIT', 2 ** 64, 1)
        self._skip_bad_tx = self._env_bool('SKIP_BAD_TX', True)

    @staticmethod
    def _env_bool(name: str, default_value: bool) -> bool:
        true_value_list = ('YES', 'ON', 'TRUE')
        false_value_list = ('NO', 'OFF', 'FALSE')

        value = os.environ.get(name, true_value_list[0] if default_value else false_value_list[0]).upper().strip()
        if (value not in true_value_list) and (value not in false_value_list):
            LOG.error(f'{name} cannot be: {true_value_list} or {false_value_list}')
            return default_value

        return value in true_value_list

    @staticmethod
    def _env_num(
        name: str, default_value: Union[int, Decimal],
        min_value: Optional[Union[int, Decimal]] = None,
        max_value: Optional[Union[int, Decimal]] = None
    ) -> Union[int, Decimal]:
        value = os.environ.get(name, None)
        if value is None:
            return default_value

        try:
            if isinstance(default_value, int):
                value = int(value, base=10)
            else:
                value = Decimal(value)
        except (ValueError, ArithmeticError):
            LOG.error(f'Bad value for {name}, force to use default value {default_value}')
            return default_value

        if (min_value is not None) and (value < min_value):
            LOG.error(f'{name} cannot be less than min value {min_value}')
            value = min_value
        elif (max_value is not None) and (value > max_value):
            LOG.error(f'{name} cannot be bigger than max value {max_value}')
            value = max_value
        return value

    def _env_log_level(self, name: str, default_value: str) -> str:
        value = os.environ.get(name, default_value).upper().strip()
        if value not in self._log_level_list:
            LOG.error(f'{name} cannot be {value}, should be one of {self._log_level_list}')
            return default_value
        return value

    ###################
    # Logging settings

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def log_json_format(self) -> bool:
        return self._log_json_format

    @property
    def log_full_object_info(self) -> bool:
        return self._log_full_object_info

    @property
    def log_object_info_limit(self) -> int:
        return self._log_object_info_limit

    ######################
    # Traversal settings

    @property
    def skip_bad_tx(self) -> bool:
        """Block-wide walks drop a malformed transaction instead of raising"""
        return self._skip_bad_tx

    def as_dict(self) -> Dict[str, Any]:
        return {
            'LOG_LEVEL': self.log_level,
            'LOG_JSON_FORMAT': self.log_json_format,
            'LOG_FULL_OBJECT_INFO': self.log_full_object_info,
            'LOG_OBJECT_INFO_LIMIT': self.log_object_info_limit,
            'SKIP_BAD_TX': self.skip_bad_tx,
        }
