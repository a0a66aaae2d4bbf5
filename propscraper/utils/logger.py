"""
Structured logging utility for the listing scraper.
Provides structured logs with trace IDs so one scrape run can be followed end to end.
"""
import uuid
import logging
import structlog
from contextvars import ContextVar
from typing import Any, Dict, Optional

from propscraper.config import config

# Context variable for trace ID
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")


def get_trace_id() -> str:
    """Get current trace ID or generate new one."""
    trace_id = trace_id_var.get()
    if not trace_id:
        trace_id = uuid.uuid4().hex[:8]
        trace_id_var.set(trace_id)
    return trace_id


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Set a new trace ID for the current context."""
    new_trace_id = trace_id or uuid.uuid4().hex[:8]
    trace_id_var.set(new_trace_id)
    return new_trace_id


def add_trace_id(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Processor to add trace ID to all log entries."""
    event_dict["trace_id"] = get_trace_id()
    return event_dict


def configure_logging():
    """Configure structlog with appropriate processors."""
    processors = [
        structlog.contextvars.merge_contextvars,
        add_trace_id,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if config.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.LOG_LEVEL.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)


class LayerLogger:
    """
    Component logger shared by adapters, extractors and layers.
    Keeps event names and fields consistent across the pipeline.
    """

    def __init__(self, layer_name: str):
        self.layer_name = layer_name
        self.logger = get_logger(layer_name)

    def log_decision(
        self,
        decision: str,
        reason: str,
        url: Optional[str] = None,
        **extra
    ):
        """Log a decision made by this component."""
        self.logger.info(
            "decision_made",
            layer=self.layer_name,
            decision=decision,
            reason=reason,
            url=url,
            **extra
        )

    def log_action(
        self,
        action: str,
        status: str = "started",
        **extra
    ):
        """Log an action being performed."""
        self.logger.info(
            f"action_{status}",
            layer=self.layer_name,
            action=action,
            **extra
        )

    def log_fallback(
        self,
        from_source: str,
        to_source: str,
        reason: str,
        **extra
    ):
        """Log a fallback from one source to another."""
        self.logger.warning(
            "fallback_triggered",
            layer=self.layer_name,
            from_source=from_source,
            to_source=to_source,
            reason=reason,
            **extra
        )

    def log_error(
        self,
        error: str,
        error_type: str = "unknown",
        **extra
    ):
        """Log an error with full context."""
        self.logger.error(
            "error_occurred",
            layer=self.layer_name,
            error=error,
            error_type=error_type,
            **extra
        )

    def log_attempt(
        self,
        url: str,
        strategy: str,
        outcome: str,
        status_code: Optional[int] = None,
        **extra
    ):
        """Log one acquisition attempt: which strategy, and whether its page was accepted."""
        self.logger.info(
            "acquisition_attempt",
            layer=self.layer_name,
            url=url,
            strategy=strategy,
            outcome=outcome,
            status_code=status_code,
            **extra
        )

    def log_image_download(self, url: str, position: int, size: int):
        self.logger.info(
            "image_downloaded",
            layer=self.layer_name,
            url=url,
            position=position,
            bytes=size,
        )

    def log_status(
        self,
        run_id: str,
        url: str,
        state: str,
        message: Optional[str] = None,
    ):
        """Log a per-URL status transition inside a scrape run."""
        self.logger.info(
            "status_transition",
            layer=self.layer_name,
            run_id=run_id,
            url=url,
            state=state,
            message=message,
        )

    def log_extraction(
        self,
        source: str,
        counts: Dict[str, int],
        **extra
    ):
        """Log per-pass candidate counts from heuristic extraction."""
        self.logger.info(
            "candidates_extracted",
            layer=self.layer_name,
            source=source,
            counts=counts,
            total=sum(counts.values()),
            **extra
        )


# Initialize logging on module import
configure_logging()
