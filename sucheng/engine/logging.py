"""
日志配置模块

控制台彩色输出、可选的轮转日志文件、JSON 结构化格式
"""

import os
import sys
import logging
import orjson
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional
from pathlib import Path
from functools import wraps
import time


# 日志目录，可通过 SUCHENG_LOG_DIR 覆盖
LOG_DIR = Path(os.getenv('SUCHENG_LOG_DIR', Path.cwd() / 'logs'))


class JsonFormatter(logging.Formatter):
    """JSON 格式日志，通过 extra 传入的请求字段会一并输出"""

    EXTRA_FIELDS = ('request_id', 'duration_ms', 'status_code')

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        for name in self.EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return orjson.dumps(log_data).decode('utf-8')


class ColorFormatter(logging.Formatter):
    """彩色控制台输出"""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, '')
        # 复制一份，避免污染其他 handler 看到的 levelname
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(
    name: str = 'sucheng',
    level: str = 'INFO',
    log_to_file: bool = False,
    log_to_console: bool = True,
    json_format: bool = False,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    配置日志系统

    Args:
        name: 日志器名称
        level: 日志级别
        log_to_file: 是否写入 LOG_DIR 下的轮转文件
        log_to_console: 是否输出到 stderr
        json_format: 是否使用 JSON 格式
        max_bytes: 单个日志文件最大大小
        backup_count: 保留的日志文件数量

    Returns:
        配置好的 Logger 实例
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # 清除已有 handlers，避免重复输出
    logger.handlers.clear()

    detailed_format = '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s'
    simple_format = '%(asctime)s | %(levelname)-8s | %(message)s'

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        if json_format:
            console_handler.setFormatter(JsonFormatter())
        elif sys.stderr.isatty():
            console_handler.setFormatter(ColorFormatter(simple_format))
        else:
            console_handler.setFormatter(logging.Formatter(simple_format))
        logger.addHandler(console_handler)

    if log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_DIR / f'{name}.log',
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(detailed_format))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = 'sucheng') -> logging.Logger:
    """获取 logger，未配置时按默认参数配置"""
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logging(name)
    return logger


def log_execution_time(logger: Optional[logging.Logger] = None):
    """装饰器：在 DEBUG 级别记录函数耗时"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            nonlocal logger
            if logger is None:
                logger = get_logger()

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = (time.perf_counter() - start) * 1000
                logger.error(f"{func.__name__} 执行失败, 耗时: {elapsed:.2f}ms, 错误: {e}")
                raise
            elapsed = (time.perf_counter() - start) * 1000
            logger.debug(f"{func.__name__} 执行完成, 耗时: {elapsed:.2f}ms")
            return result
        return wrapper
    return decorator


api_logger = None
engine_logger = None


def get_api_logger() -> logging.Logger:
    """获取 API 日志器"""
    global api_logger
    if api_logger is None:
        api_logger = setup_logging(
            'sucheng.api',
            level=os.getenv('LOG_LEVEL', 'INFO'),
            json_format=os.getenv('LOG_FORMAT') == 'json',
        )
    return api_logger


def get_engine_logger() -> logging.Logger:
    """获取引擎日志器"""
    global engine_logger
    if engine_logger is None:
        engine_logger = setup_logging('sucheng.engine', level=os.getenv('LOG_LEVEL', 'INFO'))
    return engine_logger
