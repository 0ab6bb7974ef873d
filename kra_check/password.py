"""
Extracción del password desde la respuesta de GetPassword

Corre antes de cualquier request de PANValidation. El password obtenido se
guarda en el Environment bajo 'password' para armar los requests siguientes.

Si el servicio falla (status != 200, XML inválido o campo ausente) se usa el
password que ya estuviera en el Environment. Si no hay ninguno se lanza
PasswordUnavailableError: nunca se inventa un password por defecto.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .envelope import SoapEnvelope
from .environment import PASSWORD_KEY, Environment
from .exceptions import PasswordUnavailableError, ResponseParseError
from .xml_tree import parse_xml_tree

logger = logging.getLogger(__name__)

PASSWORD_PATH = ("GetPasswordResponse", "GetPasswordResult")

SOURCE_SERVICE = "service"
SOURCE_CACHED = "cached"


@dataclass(frozen=True)
class PasswordOutcome:
    password: str
    source: str
    status_code: int
    # Motivo por el que no se usó la respuesta del servicio (solo SOURCE_CACHED)
    reason: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.source == SOURCE_CACHED


def parse_password_response(xml_text: str) -> Optional[str]:
    """
    Extrae GetPasswordResult de una respuesta SOAP (soap: o soap12:).

    Returns:
        Password (string no vacío) o None si no está

    Raises:
        ResponseParseError: Si el XML no se puede parsear
    """
    tree = parse_xml_tree(xml_text)
    envelope = SoapEnvelope.from_tree(tree)
    if envelope is None:
        return None
    value = envelope.body_path(PASSWORD_PATH)
    if isinstance(value, str) and value:
        return value
    return None


def extract_password(body: Optional[str], status_code: int, environment: Environment) -> PasswordOutcome:
    """
    Procesa la respuesta del servicio de password.

    Args:
        body: Cuerpo crudo de la respuesta
        status_code: HTTP status de la respuesta
        environment: Environment de la corrida (se escribe solo si hay password nuevo)

    Returns:
        PasswordOutcome con el password a usar y su origen

    Raises:
        PasswordUnavailableError: Sin password del servicio ni password previo
    """
    reason: Optional[str] = None

    if status_code == 200:
        try:
            password = parse_password_response(body or "")
        except ResponseParseError as e:
            logger.error(f"Error parsing XML: {e}")
            password = None
            reason = f"XML inválido: {e}"

        if password:
            environment.set(PASSWORD_KEY, password)
            logger.info("[PASSWORD] Password retrieved and stored")
            return PasswordOutcome(password=password, source=SOURCE_SERVICE, status_code=status_code)

        if reason is None:
            reason = "GetPasswordResult ausente en la respuesta"
        logger.warning(f"[PASSWORD] {reason}")
    else:
        reason = f"Password service returned error: {status_code}"
        logger.warning(reason)
        logger.debug(f"Response: {body}")

    if environment.has(PASSWORD_KEY):
        existing = environment.get(PASSWORD_KEY)
        logger.info("Using existing password from environment")
        return PasswordOutcome(password=existing, source=SOURCE_CACHED, status_code=status_code, reason=reason)

    logger.error("Unable to retrieve password and no existing password found")
    raise PasswordUnavailableError(
        f"Unable to retrieve password and no existing password found ({reason})",
        status_code=status_code,
    )
