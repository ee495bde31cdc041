"""JMX test plan loading and property lookup.

This module parses JMeter JMX files into ElementTree documents and
provides helpers to read the typed properties (stringProp, boolProp)
JMeter stores as child elements of each test element.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from jmx2lr.exceptions import JMXParseException


def load_jmx(jmx_path: str) -> ET.ElementTree:
    """Parse JMX file to ElementTree.

    Args:
        jmx_path: Path to JMX file.

    Returns:
        Parsed ElementTree.

    Raises:
        JMXParseException: If the file is missing, unreadable or parsing fails.
    """
    path = Path(jmx_path)
    if not path.exists():
        raise JMXParseException(f"JMX file does not exist: {jmx_path}")

    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise JMXParseException(f"Failed to parse JMX file: {e}") from e
    except OSError as e:
        raise JMXParseException(f"Failed to read JMX file: {e}") from e

    root = tree.getroot()
    if root.tag != "jmeterTestPlan":
        raise JMXParseException(
            f"Invalid JMX file: root element is '{root.tag}', "
            f"expected 'jmeterTestPlan'"
        )

    return tree


def get_string_prop(element: ET.Element, name: str) -> Optional[str]:
    """Return text of the direct stringProp child with the given name.

    Args:
        element: Test element holding the property.
        name: Value of the stringProp 'name' attribute.

    Returns:
        Property text ("" for an empty property), or None when absent.
    """
    for child in element:
        if child.tag == "stringProp" and child.get("name") == name:
            return child.text or ""
    return None


def get_bool_prop(element: ET.Element, name: str, default: bool = False) -> bool:
    """Return the value of the direct boolProp child with the given name."""
    for child in element:
        if child.tag == "boolProp" and child.get("name") == name:
            return (child.text or "").strip().lower() == "true"
    return default


def get_test_name(element: ET.Element) -> Optional[str]:
    """Return the 'testname' attribute, or None when it is blank."""
    name = element.get("testname") or ""
    if not name.strip():
        return None
    return name
