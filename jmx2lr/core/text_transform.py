"""Name and text helpers shared by the LoadRunner code writers."""

import re
from typing import Optional

# JMeter variable reference: ${varName}
JMETER_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

# Anything outside this set is replaced in folder names and cfg sections
UNSAFE_NAME_PATTERN = re.compile(r"[^A-Za-z0-9_\-]")


def sanitize_name(name: Optional[str]) -> str:
    """Make a display name safe for folder names and cfg section ids.

    Args:
        name: Arbitrary display name

    Returns:
        Name with every character outside [A-Za-z0-9_-] replaced by '_'
    """
    if name is None:
        return ""
    return UNSAFE_NAME_PATTERN.sub("_", name)


def escape_for_c(text: Optional[str]) -> str:
    """Escape text for embedding in a C string literal.

    Backslashes are escaped before quotes so the backslashes added for
    quotes are not escaped a second time.
    """
    if text is None:
        return ""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def convert_jmeter_vars(text: Optional[str]) -> str:
    """Rewrite JMeter ${var} references to LoadRunner {var} references.

    Example:
        >>> convert_jmeter_vars("/users/${userId}")
        '/users/{userId}'
    """
    if text is None:
        return ""
    return JMETER_VAR_PATTERN.sub(r"{\1}", text)


def to_c_literal(text: Optional[str]) -> str:
    """Variable rewrite followed by C escaping, in that order."""
    return escape_for_c(convert_jmeter_vars(text))
