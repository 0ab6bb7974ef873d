"""
Conversión de XML/SOAP a un árbol genérico de dicts

Reglas:
- Las claves son los nombres de elemento tal como aparecen en el XML,
  con prefijo incluido ("soap:Envelope", "soap12:Body", "APP_PAN_NO")
- Un elemento sin hijos colapsa a su texto (strip); vacío => ""
- Hermanos repetidos con el mismo nombre no existen en este esquema: se
  reportan como ResponseParseError
- Atributos y declaraciones de namespace se ignoran
"""
import re
from typing import Any, Dict, Optional, Sequence, Union

from lxml import etree

from .exceptions import ResponseParseError

Node = Union[str, Dict[str, Any]]

# Sin red ni entidades externas
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)

# El texto ya viene decodificado: el encoding declarado no aplica
_XML_DECLARATION = re.compile(r"^\ufeff?\s*<\?xml[^>]*\?>")


def element_key(element: Any) -> str:
    """Nombre de elemento con prefijo, p.ej. 'soap12:Envelope'"""
    local = etree.QName(element).localname
    if element.prefix:
        return f"{element.prefix}:{local}"
    return local


def element_to_node(element: Any) -> Node:
    """
    Convierte un elemento lxml en nodo del árbol.

    Raises:
        ResponseParseError: Si hay hermanos repetidos
    """
    children = [c for c in element if isinstance(c.tag, str)]
    if len(children) == 0:
        return (element.text or "").strip()

    node: Dict[str, Any] = {}
    for child in children:
        key = element_key(child)
        if key in node:
            raise ResponseParseError(
                f"Elemento repetido '{key}' dentro de '{element_key(element)}'"
            )
        node[key] = element_to_node(child)
    return node


def parse_xml_tree(xml_text: str) -> Dict[str, Any]:
    """
    Parsea XML/SOAP a un árbol genérico.

    Args:
        xml_text: Cuerpo de la respuesta como string

    Returns:
        Dict con una sola clave (el elemento raíz)

    Raises:
        ResponseParseError: XML mal formado, vacío o con hermanos repetidos
    """
    if not xml_text or not xml_text.strip():
        raise ResponseParseError("Respuesta vacía: no hay XML para parsear")

    try:
        text = _XML_DECLARATION.sub("", xml_text.strip(), count=1)
        root = etree.fromstring(text.encode("utf-8"), parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise ResponseParseError(str(e)) from e

    return {element_key(root): element_to_node(root)}


def get_path(tree: Any, path: Sequence[str]) -> Optional[Any]:
    """
    Recorre el árbol por una lista de claves.

    Nunca lanza: si falta un nivel intermedio (o un nivel es texto) retorna None.

    Args:
        tree: Árbol (o sub-árbol) de parse_xml_tree
        path: Claves en orden, p.ej. ["APP_PAN_INQ", "APP_PAN_NO"]

    Returns:
        Nodo encontrado o None
    """
    current = tree
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def get_text(tree: Any, path: Sequence[str]) -> Optional[str]:
    """Como get_path, pero solo retorna hojas de texto"""
    value = get_path(tree, path)
    return value if isinstance(value, str) else None


def first_missing(tree: Any, path: Sequence[str]) -> Optional[str]:
    """
    Retorna el primer nivel de `path` que no existe en el árbol (None si existe completo).
    """
    current = tree
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return key
        current = current[key]
    return None
