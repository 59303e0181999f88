# advice package
from .config import AdviceConfig
from .errors import (
    AdviceError,
    TransportError,
    ExtractionInsufficient,
    NotConfigured,
    ConfigurationAbsent,
    InputValidationError
)
from .service import AdviceService, split_source

__all__ = [
    'AdviceConfig',
    'AdviceError',
    'TransportError',
    'ExtractionInsufficient',
    'NotConfigured',
    'ConfigurationAbsent',
    'InputValidationError',
    'AdviceService',
    'split_source'
]
