import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Optional, Sequence


logger = logging.getLogger(__name__)

NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

# Serialize parsed documents without ns0: prefixes.
ET.register_namespace("", NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)

DEFAULT_NUMBER_DIGITS = 2

LENGTH_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(px)?\s*")


def num2str(num: int | float | bool, digit: int = DEFAULT_NUMBER_DIGITS) -> str:
    """Convert a number to a string, using the specified format for floats."""
    if isinstance(num, bool):
        return "true" if num else "false"
    if isinstance(num, int):
        return str(num)
    if isinstance(num, float):
        if num.is_integer():
            return str(int(num))
        # Format float with specified number of digits, and trim trailing zeros
        number = f"{num:.{digit}f}"
        return f"{number[0]}{number[1:].rstrip('0').rstrip('.')}"
    raise ValueError(f"Unsupported type: {type(num)}")


def seq2str(
    seq: Sequence[int | float | bool],
    sep: str = ",",
    digit: int = DEFAULT_NUMBER_DIGITS,
) -> str:
    """Convert a sequence of numbers to a string, using the specified format for floats."""
    return sep.join(num2str(n, digit) for n in seq)


def create_node(
    tag: str,
    parent: Optional[ET.Element] = None,
    **kwargs: Any,
) -> ET.Element:
    """Create an XML node with attributes.

    Underscores in keyword names are converted to hyphens, and a trailing
    underscore is dropped so that keywords like ``class_`` can be used.
    """
    node = ET.Element(tag)
    for key, value in kwargs.items():
        if value is None:
            continue
        key = key.rstrip("_")  # allow trailing underscore for keywords
        key = key.replace("_", "-")  # convert underscores to hyphens
        set_attribute(node, key, value)
    if parent is not None:
        parent.append(node)
    return node


def set_attribute(node: ET.Element, key: str, value: Any) -> None:
    """Add an attribute to an XML node."""
    if isinstance(value, (int, float, bool)):
        node.set(key, num2str(value))
    elif isinstance(value, list) and all(
        isinstance(v, (int, float, bool)) for v in value
    ):
        node.set(key, seq2str(value))
    else:
        node.set(key, str(value))


def local_name(tag: Any) -> str:
    """Return the tag name without its namespace."""
    if not isinstance(tag, str):
        return ""
    return tag.split("}")[-1] if "}" in tag else tag


def parse_length(value: Optional[str]) -> Optional[float]:
    """Parse a unitless or ``px`` length, returning None for anything else."""
    if value is None:
        return None
    match = LENGTH_RE.fullmatch(value)
    if match is None:
        return None
    return float(match.group(1))


def parse_viewbox(value: Optional[str]) -> Optional[tuple[float, float, float, float]]:
    """Parse a ``viewBox`` attribute into ``(min_x, min_y, width, height)``."""
    if not value:
        return None
    parts = value.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        min_x, min_y, width, height = (float(p) for p in parts)
    except ValueError:
        return None
    return (min_x, min_y, width, height)


def fromstring(data: str | bytes) -> ET.Element:
    """Parse an XML string to an Element."""
    return ET.fromstring(data)


def tostring(node: ET.Element, indent: str = "  ") -> str:
    """Convert an XML node to a string."""
    if indent:
        ET.indent(node, space=indent)
    return ET.tostring(node, encoding="unicode", xml_declaration=False)


def write(node: ET.Element, file: Any, indent: str = "  ") -> None:
    """Write an XML node to a file."""
    tree = ET.ElementTree(node)
    if indent:
        ET.indent(tree, space=indent)
    tree.write(file, encoding="unicode", xml_declaration=False)
