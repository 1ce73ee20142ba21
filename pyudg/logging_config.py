# 文件: pyudg/logging_config.py
"""
日志配置

库内部每个模块使用 logging.getLogger(__name__)，不直接 print。
应用程序 (或测试脚本) 调用 setup_logging() 安装输出。
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    配置 'pyudg' 命名空间的日志输出

    Args:
        level: 日志级别 (logging.DEBUG, logging.INFO, ...)
        log_file: 可选的日志文件路径

    Returns:
        logging.Logger: 'pyudg' 根日志器
    """
    logger = logging.getLogger("pyudg")
    logger.setLevel(level)

    # 重复调用时避免叠加 handler
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
    return logger
