"""Utils package initialization."""
from propscraper.utils.logger import get_logger, LayerLogger, set_trace_id, get_trace_id
from propscraper.utils.urls import is_valid_url, parse_url_lines

__all__ = ["get_logger", "LayerLogger", "set_trace_id", "get_trace_id", "is_valid_url", "parse_url_lines"]
