from .utils import cached_method, cached_property, str_enum, str_fmt_object, get_from_dict
from .json_logger import JSONFormatter, ContextFilter, logging_context, configure_logging
