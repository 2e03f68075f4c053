#!/usr/bin/env python3
"""
日志系统配置
使用 structlog 增强标准 logging，支持彩色输出、JSON 格式和日志轮转
"""

import sys
import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler

import structlog


def setup_structlog(
    log_level: str = "INFO",
    log_file: str = None,
    use_json: bool = False,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    enable_console: bool = True
):
    """
    配置 Structlog 结构化日志系统

    Args:
        log_level: 日志级别
        log_file: 日志文件路径（可选）
        use_json: 是否使用 JSON 格式输出
        max_bytes: 单个日志文件最大字节数
        backup_count: 备份文件数量
        enable_console: 是否输出到控制台（stderr，stdout 留给计算结果）
    """

    # 解析日志级别
    level = getattr(logging, log_level.upper(), logging.INFO)

    # ==================== 配置标准 logging ====================

    logging.root.handlers.clear()
    logging.root.setLevel(level)

    handlers = []

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        handlers.append(console_handler)

    # 文件 handler（带轮转）
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        handlers.append(file_handler)

    # ==================== 配置 Structlog ====================

    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors + [
            # 传递给标准 logging
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # 标准 logging 记录也走 structlog 格式化
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    for handler in handlers:
        handler.setFormatter(formatter)
        logging.root.addHandler(handler)

    logger = structlog.get_logger()
    logger.debug(
        "structlog_configured",
        log_level=log_level,
        use_json=use_json,
        log_file=log_file
    )

    return logger


def get_logger(name: str = None):
    """
    获取 Structlog logger

    Example:
        logger = get_logger(__name__)
        logger.info("grid_computed", side="LONG", position_size=10000.0)
    """
    return structlog.get_logger(name)
