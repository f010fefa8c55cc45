"""Method and namespace name validation."""
import re
from typing import NamedTuple, Optional

VALID_NAMESPACE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)*")
VALID_METHOD_NAME = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
QUALIFIED_METHOD = re.compile(
    r"(?P<namespace>[a-zA-Z_][a-zA-Z0-9_]*(?:\.[a-zA-Z_][a-zA-Z0-9_]*)*)"
    r"\.(?P<version>[0-9]+)"
    r"\.(?P<name>[a-zA-Z_][a-zA-Z0-9_]*)"
)


class QualifiedMethod(NamedTuple):
    namespace: str
    version: int
    name: str


def validate_namespace(namespace: str) -> bool:
    """Validate a dotted service namespace such as ``org.rdk.Calculator``."""
    return bool(VALID_NAMESPACE.fullmatch(namespace))


def validate_method_name(name: str) -> bool:
    """Validate a bare method name."""
    return bool(VALID_METHOD_NAME.fullmatch(name))


def split_method(method: str) -> Optional[QualifiedMethod]:
    """Split ``<namespace>.<version>.<name>`` into its parts.

    Namespace segments never start with a digit, so the version is the last
    all-digit segment before the method name. Returns None when the string
    does not follow the convention.
    """
    match = QUALIFIED_METHOD.fullmatch(method)
    if not match:
        return None
    return QualifiedMethod(
        namespace=match.group("namespace"),
        version=int(match.group("version")),
        name=match.group("name"),
    )
