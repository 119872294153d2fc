import sys
import json
import logging
import threading
import contextlib
import traceback
import copy
from logging import LogRecord, Filter
from datetime import datetime
from typing import Optional

from ..config import Config


_TEXT_FORMAT = '%(asctime)s - pid:%(process)d [%(levelname)-.1s] %(name)s:%(lineno)d - %(message)s%(context_str)s'


class JSONFormatter(logging.Formatter):
    def format(self, record: LogRecord) -> str:
        message_dict = {
            'level': record.levelname,
            'date': datetime.fromtimestamp(record.created).isoformat(),
            'module': f'{record.filename}:{record.lineno}',
            'process': record.process,
        }
        if isinstance(record.msg, dict):
            message_dict.update(record.msg)
        else:
            message_dict['message'] = record.getMessage()

        context = getattr(record, 'context', None)
        if isinstance(context, dict):
            message_dict.update(context)

        if record.exc_info:
            message_dict['exc_info'] = {
                'type': str(record.exc_info[0]),
                'exception': str(record.exc_info[1]),
                'traceback': [
                    line.strip().replace('"', '\'').replace('\n', '')
                    for line in traceback.format_tb(record.exc_info[2])
                ]
            }

        return json.dumps(message_dict, default=str)


class ContextFilter(Filter):
    def filter(self, record: LogRecord) -> bool:
        context = getattr(threading.current_thread(), 'log_context', None)
        record.context = dict(context) if context else dict()
        if record.context:
            record.context_str = ' {' + ', '.join(f'{k}={v}' for k, v in record.context.items()) + '}'
        else:
            record.context_str = ''
        return True


@contextlib.contextmanager
def logging_context(**kwargs):
    thread = threading.current_thread()
    old_log_context = copy.copy(getattr(thread, 'log_context', dict()))
    thread.log_context = dict(old_log_context, **kwargs)
    try:
        yield
    finally:
        thread.log_context = old_log_context


def configure_logging(config: Optional[Config] = None) -> logging.Handler:
    if config is None:
        config = Config()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())
    if config.log_json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(config.log_level)
    return handler
