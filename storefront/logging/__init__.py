"""
Logging

Module de logging structuré avec:
- Format JSON structuré (LOG_001)
- Champs obligatoires (LOG_002)
- Timestamp ISO 8601 UTC (LOG_003)
- Masquage données sensibles (LOG_004)
"""

from .interfaces import (
    # Enums
    LogLevel,
    # Dataclasses
    LogEntry,
    LogConfig,
    # Interfaces
    IStructuredLogger,
    ISensitiveMasker,
    # Context
    correlation_id_var,
)
from .sensitive_masker import (
    SensitiveMasker,
)
from .structured_logger import (
    StructuredLogger,
    parse_level,
    stderr_handler,
    # Exceptions
    MissingRequiredFieldError,
    InvalidLogLevelError,
)

__all__ = [
    # Enums
    "LogLevel",
    # Dataclasses
    "LogEntry",
    "LogConfig",
    # Interfaces
    "IStructuredLogger",
    "ISensitiveMasker",
    # Context
    "correlation_id_var",
    # Implementations
    "SensitiveMasker",
    "StructuredLogger",
    "parse_level",
    "stderr_handler",
    # Exceptions
    "MissingRequiredFieldError",
    "InvalidLogLevelError",
]
