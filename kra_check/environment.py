"""
Environment compartido de la corrida

Equivale al environment persistido de Postman: se crea una vez por corrida,
lo escribe el paso de password y lo leen los requests siguientes. Se pasa
explícitamente a quien lo necesite (no hay estado global).
"""
import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

PASSWORD_KEY = "password"


class Environment:
    """Store clave-valor de la corrida"""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})
        self._lock = threading.Lock()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def has(self, key: str) -> bool:
        """True si la clave existe y tiene valor no vacío"""
        with self._lock:
            return bool(self._values.get(key))

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._values)

    # ------------------------------------------------------------------
    # Persistencia (solo CLI)
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, path: Path) -> "Environment":
        """
        Carga un Environment desde JSON. Si el archivo no existe, retorna uno vacío.

        Args:
            path: Ruta al archivo JSON (objeto plano clave -> string)
        """
        if not path.exists():
            logger.debug(f"Environment no encontrado en {path}, se crea vacío")
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Environment inválido en {path}: se esperaba un objeto JSON")
        # null equivale a variable sin valor
        return cls({str(k): str(v) for k, v in data.items() if v is not None})

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.snapshot(), indent=2, ensure_ascii=False), encoding="utf-8")
