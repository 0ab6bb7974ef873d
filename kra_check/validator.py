"""
Validación de respuestas SOAP de PANValidation

Para cada request se corre una batería fija de checks, en orden e
independientes entre sí (un fallo no corta los siguientes):

1. HTTP status == esperado (se omite si el esperado no es entero)
2. Tiempo de respuesta < límite del perfil (smoke 3000ms, regression 5000ms)
3. Content-Type contiene "xml" (solo regression)
4. Cuerpo contiene "PANValidation" y un tag de apertura XML/SOAP
5. App status "Success": estructura APP_RES_ROOT con APP_PAN_INQ y APP_PAN_SUMM
6. Otro app status no vacío: el token aparece literal en el cuerpo
7. Eco de campos de entrada (PAN, OKRA code/batch, total records, fecha de respuesta)

Nada del contenido de la respuesta hace lanzar excepción: todo termina en
un check fallido con mensaje.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import KraCheckConfig, get_config
from .envelope import SoapEnvelope
from .exceptions import ResponseParseError
from .results import ValidationResult
from .run_logger import RunLogger
from .test_cases import TestCase, is_password_request
from .xml_tree import get_text, parse_xml_tree

logger = logging.getLogger(__name__)

# Nombres de checks
CHECK_CONTENT_TYPE = "Response content type is XML"
CHECK_VALID_XML = "Valid XML response"
CHECK_XML_PARSEABLE = "XML response parseable"
CHECK_STRUCTURE = "Success response structure"
CHECK_PAN_ECHO = "PAN number echoed correctly"
CHECK_OKRA_CODE = "OKRA code preserved"
CHECK_OKRA_BATCH = "OKRA batch preserved"
CHECK_TOTAL_RECORDS = "Total records preserved"
CHECK_RESPONSE_DATE = "Response date is present"

PAN_VALIDATION_MARKER = "PANValidation"
XML_OPENING_PATTERN = re.compile(r"<\?xml|<soap|<[\w.-]*:Envelope")

# Camino desde el Body hasta la raíz de la respuesta de aplicación
RESULT_PATH = ("PANValidationResponse", "PANValidationResult", "APP_RES_ROOT")
INQUIRY_NODE = "APP_PAN_INQ"
SUMMARY_NODE = "APP_PAN_SUMM"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def check_http_status_name(code: int) -> str:
    return f"HTTP Status: {code}"


def check_response_time_name(max_ms: int) -> str:
    return f"Response time (< {max_ms}ms)"


def check_error_code_name(app_status: str) -> str:
    return f"Error code: {app_status}"


def check_app_status_name(app_status: str) -> str:
    return f"APP_STATUS should be {app_status}"


def parse_expected_status(raw: Any) -> Optional[int]:
    """
    Interpreta el HTTP status esperado (mismo criterio que parseInt).

    Returns:
        Entero o None si el dato no es numérico
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class ResponseMeta:
    status_code: int
    content_type: Optional[str] = None
    elapsed_ms: int = 0


@dataclass(frozen=True)
class ValidationProfile:
    name: str
    max_response_ms: int
    check_content_type: bool
    check_app_status_field: bool

    @classmethod
    def smoke(cls, config: Optional[KraCheckConfig] = None) -> "ValidationProfile":
        config = config or get_config()
        return cls(
            name=KraCheckConfig.PROFILE_SMOKE,
            max_response_ms=config.max_response_ms(KraCheckConfig.PROFILE_SMOKE),
            check_content_type=False,
            check_app_status_field=False,
        )

    @classmethod
    def regression(cls, config: Optional[KraCheckConfig] = None) -> "ValidationProfile":
        config = config or get_config()
        return cls(
            name=KraCheckConfig.PROFILE_REGRESSION,
            max_response_ms=config.max_response_ms(KraCheckConfig.PROFILE_REGRESSION),
            check_content_type=True,
            check_app_status_field=True,
        )

    @classmethod
    def named(cls, name: str, config: Optional[KraCheckConfig] = None) -> "ValidationProfile":
        if name == KraCheckConfig.PROFILE_SMOKE:
            return cls.smoke(config)
        if name == KraCheckConfig.PROFILE_REGRESSION:
            return cls.regression(config)
        raise ValueError(f"Perfil inválido: {name}. Debe ser 'smoke' o 'regression'")


class ResponseValidator:
    """Validador de respuestas PANValidation para un perfil dado"""

    def __init__(self, profile: Optional[ValidationProfile] = None, run_logger: Optional[RunLogger] = None):
        self.profile = profile or ValidationProfile.smoke()
        self.run_logger = run_logger or RunLogger(__name__)

    def validate(self, body: Optional[str], meta: ResponseMeta, test_case: TestCase,
                 request_name: Optional[str] = None) -> ValidationResult:
        """
        Valida una respuesta contra un TestCase.

        Args:
            body: Cuerpo crudo de la respuesta (puede ser vacío)
            meta: Status, content-type y tiempo de respuesta
            test_case: Entradas y resultado esperado
            request_name: Nombre del request (los de password se omiten)

        Returns:
            ValidationResult con los checks en orden
        """
        result = ValidationResult(test_id=test_case.test_id)

        if request_name and is_password_request(request_name):
            logger.debug(f"Request de password omitido en validación PAN: {request_name}")
            return result

        body = body or ""

        self._check_http_status(result, meta, test_case)
        self._check_response_time(result, meta)
        if self.profile.check_content_type:
            self._check_content_type(result, meta)
        self._check_valid_xml(result, body)

        expected_app = test_case.expected_app_status
        if test_case.expects_success:
            self._check_success_response(result, body, test_case)
        elif expected_app:
            result.add(
                check_error_code_name(expected_app),
                expected_app in body,
                None if expected_app in body else f"'{expected_app}' no aparece en la respuesta",
            )

        self.run_logger.log_result(result, self.profile.name, request_name)
        return result

    # ------------------------------------------------------------------
    # Checks sobre metadata y cuerpo crudo
    # ------------------------------------------------------------------
    def _check_http_status(self, result: ValidationResult, meta: ResponseMeta, test_case: TestCase) -> None:
        expected = parse_expected_status(test_case.expected_http_status)
        if expected is None:
            logger.warning(
                f"[{test_case.test_id}] expected_http_status no numérico "
                f"('{test_case.expected_http_status}'): se omite el check de status"
            )
            return
        passed = meta.status_code == expected
        result.add(
            check_http_status_name(expected),
            passed,
            None if passed else f"esperado {expected}, recibido {meta.status_code}",
        )

    def _check_response_time(self, result: ValidationResult, meta: ResponseMeta) -> None:
        limit = self.profile.max_response_ms
        passed = meta.elapsed_ms < limit
        result.add(
            check_response_time_name(limit),
            passed,
            None if passed else f"{meta.elapsed_ms}ms >= {limit}ms",
        )

    def _check_content_type(self, result: ValidationResult, meta: ResponseMeta) -> None:
        content_type = meta.content_type or ""
        passed = "xml" in content_type
        result.add(
            CHECK_CONTENT_TYPE,
            passed,
            None if passed else f"Content-Type sin 'xml': '{content_type}'",
        )

    def _check_valid_xml(self, result: ValidationResult, body: str) -> None:
        if PAN_VALIDATION_MARKER not in body:
            result.add(CHECK_VALID_XML, False, f"La respuesta no contiene '{PAN_VALIDATION_MARKER}'")
            return
        if not XML_OPENING_PATTERN.search(body):
            result.add(CHECK_VALID_XML, False, "La respuesta no tiene tag de apertura XML/SOAP")
            return
        result.add(CHECK_VALID_XML, True)

    # ------------------------------------------------------------------
    # Checks sobre el árbol parseado
    # ------------------------------------------------------------------
    def _check_success_response(self, result: ValidationResult, body: str, test_case: TestCase) -> None:
        try:
            tree = parse_xml_tree(body)
        except ResponseParseError as e:
            logger.warning(f"[{test_case.test_id}] Error al parsear XML: {e}")
            result.add(CHECK_XML_PARSEABLE, False, f"Failed to parse XML response: {e}")
            return

        envelope = SoapEnvelope.from_tree(tree)
        if envelope is None:
            result.add(CHECK_STRUCTURE, False, "Falta nivel: soap:Envelope / soap12:Envelope")
            return

        missing = envelope.missing_level(RESULT_PATH)
        if missing is not None:
            result.add(CHECK_STRUCTURE, False, f"Falta nivel: {missing}")
            return

        app_root = envelope.body_path(RESULT_PATH)
        if not isinstance(app_root, dict):
            result.add(CHECK_STRUCTURE, False, "APP_RES_ROOT vacío")
            return
        inquiry = app_root.get(INQUIRY_NODE)
        summary = app_root.get(SUMMARY_NODE)
        if not (isinstance(inquiry, dict) and inquiry):
            result.add(CHECK_STRUCTURE, False, f"Falta nivel: {INQUIRY_NODE}")
            return
        if not (isinstance(summary, dict) and summary):
            result.add(CHECK_STRUCTURE, False, f"Falta nivel: {SUMMARY_NODE}")
            return

        result.add(CHECK_STRUCTURE, True)
        self._check_echoed_fields(result, test_case, inquiry, summary)

    def _check_echoed_fields(self, result: ValidationResult, test_case: TestCase,
                             inquiry: Dict[str, Any], summary: Dict[str, Any]) -> None:
        if self.profile.check_app_status_field and "APP_STATUS" in inquiry:
            _add_equals(result, check_app_status_name(test_case.expected_app_status),
                        get_text(inquiry, ["APP_STATUS"]), test_case.expected_app_status)

        if test_case.pan_no:
            _add_equals(result, CHECK_PAN_ECHO, get_text(inquiry, ["APP_PAN_NO"]), test_case.pan_no)
        if test_case.okra_code:
            _add_equals(result, CHECK_OKRA_CODE, get_text(summary, ["APP_OTHKRA_CODE"]), test_case.okra_code)
        if test_case.okra_batch:
            _add_equals(result, CHECK_OKRA_BATCH, get_text(summary, ["APP_OTHKRA_BATCH"]), str(test_case.okra_batch))
        if test_case.total_records:
            _add_equals(result, CHECK_TOTAL_RECORDS, get_text(summary, ["APP_TOTAL_REC"]),
                        str(test_case.total_records))

        response_date = get_text(summary, ["APP_RESPONSE_DATE"])
        result.add(
            CHECK_RESPONSE_DATE,
            bool(response_date),
            None if response_date else "APP_RESPONSE_DATE ausente o vacío",
        )


def _add_equals(result: ValidationResult, name: str, actual: Optional[str], expected: str) -> None:
    passed = actual == expected
    result.add(name, passed, None if passed else f"esperado '{expected}', recibido '{actual}'")


def validate_response(body: Optional[str], meta: ResponseMeta, test_case: TestCase,
                      profile: str = KraCheckConfig.PROFILE_SMOKE,
                      config: Optional[KraCheckConfig] = None) -> ValidationResult:
    """Atajo: valida con el perfil indicado ('smoke' o 'regression')"""
    validator = ResponseValidator(ValidationProfile.named(profile, config))
    return validator.validate(body, meta, test_case)
