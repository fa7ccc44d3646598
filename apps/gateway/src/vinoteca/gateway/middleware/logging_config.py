"""网关日志配置 -- structlog 与标准库 logging 共用一套渲染

环境变量：
    VINOTECA_LOG_FORMAT: dev（默认，可读输出）| json（结构化输出）
    VINOTECA_LOG_LEVEL: 根日志级别（默认 INFO）
    VINOTECA_SQL_LOG_LEVEL: aiosqlite 日志级别（默认 WARNING，DEBUG 时输出每条语句）
    VINOTECA_ACCESS_LOG: 是否保留 uvicorn.access 访问行（默认 false，
        LoggingMiddleware 已记录 request_completed）
    VINOTECA_LOG_HEALTH_CHECKS: 是否记录 /health、/ready 的成功请求（默认 false）
    LOGFIRE_SEND_TO_LOGFIRE: true 时启用 Logfire，否则只输出本地日志
"""

import logging
import os
from typing import Any, Literal

import structlog
from fastapi import FastAPI
from pydantic import BaseModel

HEALTH_CHECK_PATHS = frozenset({"/health", "/ready"})
REQUEST_EVENTS = frozenset({"request_started", "request_completed"})

_TRUE_VALUES = {"1", "true", "yes", "on"}


class LoggingSettings(BaseModel):
    """网关日志配置"""

    format: Literal["dev", "json"] = "dev"
    level: int = logging.INFO
    sql_level: int = logging.WARNING
    access_log: bool = False
    log_health_checks: bool = False


def _parse_level(value: str | None, default: int) -> int:
    if not value:
        return default
    return logging.getLevelNamesMapping().get(value.strip().upper(), default)


def _parse_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUE_VALUES


def load_logging_settings() -> LoggingSettings:
    """从环境变量读取日志配置，非法取值回退默认"""
    log_format = os.environ.get("VINOTECA_LOG_FORMAT", "dev").strip().lower()
    return LoggingSettings(
        format="json" if log_format == "json" else "dev",
        level=_parse_level(os.environ.get("VINOTECA_LOG_LEVEL"), logging.INFO),
        sql_level=_parse_level(os.environ.get("VINOTECA_SQL_LOG_LEVEL"), logging.WARNING),
        access_log=_parse_flag(os.environ.get("VINOTECA_ACCESS_LOG")),
        log_health_checks=_parse_flag(os.environ.get("VINOTECA_LOG_HEALTH_CHECKS")),
    )


def drop_health_check_requests(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """丢弃健康检查的成功请求日志；失败（>= 400）仍然保留

    依赖 LoggingMiddleware 通过 contextvars 绑定的 path，
    必须放在 merge_contextvars 之后。
    """
    if (
        event_dict.get("event") in REQUEST_EVENTS
        and event_dict.get("path") in HEALTH_CHECK_PATHS
        and event_dict.get("status_code", 0) < 400
    ):
        raise structlog.DropEvent
    return event_dict


def _shared_processors(settings: LoggingSettings) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [structlog.contextvars.merge_contextvars]
    if not settings.log_health_checks:
        processors.append(drop_health_check_requests)
    processors += [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    return processors


def setup_logging(settings: LoggingSettings | None = None) -> LoggingSettings:
    """初始化 structlog 与标准库 logging

    Returns:
        实际生效的 LoggingSettings
    """
    settings = settings or load_logging_settings()
    shared_processors = _shared_processors(settings)

    if settings.format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.level)

    logging.getLogger("aiosqlite").setLevel(settings.sql_level)
    # 请求日志由 LoggingMiddleware 负责，访问行默认只保留 warning 以上
    logging.getLogger("uvicorn.access").setLevel(
        logging.INFO if settings.access_log else logging.WARNING
    )
    return settings


def setup_logfire(app: FastAPI, settings: LoggingSettings | None = None) -> bool:
    """Logfire 可选初始化

    LOGFIRE_SEND_TO_LOGFIRE=true 时启用（需要 LOGFIRE_TOKEN），
    未开启 VINOTECA_LOG_HEALTH_CHECKS 时不为健康检查生成 span。

    Returns:
        是否已启用 Logfire
    """
    if not _parse_flag(os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false")):
        return False

    settings = settings or load_logging_settings()
    excluded = None if settings.log_health_checks else ",".join(sorted(HEALTH_CHECK_PATHS))
    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi(app, excluded_urls=excluded)
    except Exception as e:
        structlog.get_logger().warning(
            "logfire_init_failed",
            error_type=type(e).__name__,
            message="Logfire 初始化失败，降级为纯本地日志",
        )
        return False
    return True
