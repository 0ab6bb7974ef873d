"""
Configuración del validador de respuestas PAN
"""
import os
from typing import Optional
from dotenv import load_dotenv

from .exceptions import ConfigError

load_dotenv()


class KraCheckConfig:
    """Configuración de la corrida (límites de tiempo y logging)"""

    PROFILE_SMOKE = "smoke"
    PROFILE_REGRESSION = "regression"

    # Límites de tiempo de respuesta por perfil (ms)
    DEFAULT_SMOKE_MAX_MS = 3000
    DEFAULT_REGRESSION_MAX_MS = 5000

    def __init__(self):
        """
        Lee la configuración desde variables de entorno (o .env)

        Raises:
            ConfigError: Si algún límite no es un entero positivo
        """
        self.smoke_max_ms = _int_env("KRA_CHECK_SMOKE_MAX_MS", self.DEFAULT_SMOKE_MAX_MS)
        self.regression_max_ms = _int_env("KRA_CHECK_REGRESSION_MAX_MS", self.DEFAULT_REGRESSION_MAX_MS)

        self.log_level = os.getenv("KRA_CHECK_LOG_LEVEL", "INFO").upper()
        log_dir = os.getenv("KRA_CHECK_LOG_DIR", "").strip()
        self.log_dir: Optional[str] = log_dir or None

    def max_response_ms(self, profile: str) -> int:
        """
        Retorna el límite de tiempo de respuesta para un perfil

        Args:
            profile: 'smoke' o 'regression'

        Returns:
            Límite en milisegundos
        """
        if profile == self.PROFILE_SMOKE:
            return self.smoke_max_ms
        if profile == self.PROFILE_REGRESSION:
            return self.regression_max_ms
        raise ConfigError(f"Perfil inválido: {profile}. Debe ser 'smoke' o 'regression'")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} debe ser un entero (valor recibido: '{raw}')")
    if value <= 0:
        raise ConfigError(f"{name} debe ser mayor a 0 (valor recibido: {value})")
    return value


def get_config() -> KraCheckConfig:
    """
    Obtiene la configuración desde variables de entorno

    Returns:
        Configuración de kra_check
    """
    return KraCheckConfig()
