"""
Validación de respuestas SOAP del servicio PAN Validation (CVL KRA)
"""
from .config import KraCheckConfig, get_config
from .environment import Environment
from .exceptions import KraCheckError, PasswordUnavailableError, ResponseParseError
from .password import PasswordOutcome, extract_password
from .results import CheckResult, ValidationResult
from .test_cases import TestCase, smoke_test_cases
from .validator import ResponseMeta, ResponseValidator, ValidationProfile, validate_response

__all__ = [
    'KraCheckConfig', 'get_config', 'Environment',
    'KraCheckError', 'PasswordUnavailableError', 'ResponseParseError',
    'PasswordOutcome', 'extract_password',
    'CheckResult', 'ValidationResult',
    'TestCase', 'smoke_test_cases',
    'ResponseMeta', 'ResponseValidator', 'ValidationProfile', 'validate_response',
]
