"""
Excepciones del validador de respuestas PAN
"""


class KraCheckError(Exception):
    """Error base de kra_check"""
    pass


class ConfigError(KraCheckError):
    """Configuración inválida (variables de entorno o .env)"""
    pass


class ResponseParseError(KraCheckError):
    """El cuerpo de la respuesta no es XML utilizable"""
    pass


class PasswordUnavailableError(KraCheckError):
    """
    El servicio de password falló y no hay password previo en el Environment.

    Detiene todos los requests dependientes de la corrida; no es un fallo de check.
    """

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code
