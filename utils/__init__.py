"""
工具模块包
提供项目所需的通用工具和功能
"""

# 导出核心工具
from .exceptions import (
    QuizSystemError,
    ConfigurationError,
    ClientInputError,
    NotFoundError,
    ConflictError,
    InternalError,
    ErrorCodes,
    create_error_response
)
from .path_utils import BASE_DIR, CONFIG_DIR, LOG_DIR
from .config_manager import (
    config_manager,
    UnifiedConfigManager,
    ApiConfig,
    QuizConfig,
    LoggingConfig,
    LoggingModuleConfig
)
from .logging_manager import (
    LogContext,
    logging_manager,
    logger,
    LogConfig,
    initialize_logging,
    ModuleLoggers,
    api_logger,
    quiz_logger,
    store_logger,
    config_logger
)
from .date_utils import DayClock, FixedDayClock, format_day_key, parse_day_key

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "config_manager",
    "UnifiedConfigManager",
    "ApiConfig",
    "QuizConfig",
    "LoggingConfig",
    "LoggingModuleConfig",

    # 异常处理
    "QuizSystemError",
    "ConfigurationError",
    "ClientInputError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
    "ErrorCodes",
    "create_error_response",

    # 日志工具
    "LogContext",
    "logging_manager",
    "logger",
    "LogConfig",
    "initialize_logging",
    "ModuleLoggers",
    "api_logger",
    "quiz_logger",
    "store_logger",
    "config_logger",

    # 日期工具
    "DayClock",
    "FixedDayClock",
    "format_day_key",
    "parse_day_key",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "LOG_DIR",
]
