"""
Dialectos de envelope SOAP

El servicio responde con 'soap:Envelope' (SOAP 1.1) o 'soap12:Envelope' (SOAP 1.2).
Se resuelve el dialecto una sola vez al inicio; el resto del recorrido no
depende del prefijo.
"""
import enum
from typing import Any, Dict, Optional, Sequence

from .xml_tree import first_missing, get_path


class EnvelopeDialect(enum.Enum):
    SOAP11 = "soap"
    SOAP12 = "soap12"

    @property
    def prefix(self) -> str:
        return self.value

    @property
    def envelope_key(self) -> str:
        return f"{self.value}:Envelope"

    @property
    def body_key(self) -> str:
        return f"{self.value}:Body"


# Orden de detección: soap primero, luego soap12
DIALECT_ORDER = (EnvelopeDialect.SOAP11, EnvelopeDialect.SOAP12)


def detect_dialect(tree: Dict[str, Any]) -> Optional[EnvelopeDialect]:
    """
    Detecta el dialecto del envelope en un árbol parseado.

    Returns:
        EnvelopeDialect o None si no hay envelope reconocible
    """
    if not isinstance(tree, dict):
        return None
    for dialect in DIALECT_ORDER:
        if dialect.envelope_key in tree:
            return dialect
    return None


class SoapEnvelope:
    """Envelope ya resuelto; da acceso al Body sin importar el dialecto"""

    def __init__(self, tree: Dict[str, Any], dialect: EnvelopeDialect):
        self.tree = tree
        self.dialect = dialect

    @classmethod
    def from_tree(cls, tree: Dict[str, Any]) -> Optional["SoapEnvelope"]:
        dialect = detect_dialect(tree)
        if dialect is None:
            return None
        return cls(tree, dialect)

    @property
    def body(self) -> Optional[Any]:
        return get_path(self.tree, [self.dialect.envelope_key, self.dialect.body_key])

    def body_path(self, path: Sequence[str]) -> Optional[Any]:
        """Recorre `path` desde el Body"""
        return get_path(self.tree, [self.dialect.envelope_key, self.dialect.body_key, *path])

    def missing_level(self, path: Sequence[str]) -> Optional[str]:
        """
        Primer nivel ausente desde el Envelope (Body incluido), o None si todo existe.
        """
        return first_missing(self.tree, [self.dialect.envelope_key, self.dialect.body_key, *path])
