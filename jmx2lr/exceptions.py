"""Custom exceptions for the JMX to LoadRunner converter.

This module defines the exception hierarchy for the converter.
All custom exceptions inherit from Jmx2LrException base class.
"""


class Jmx2LrException(Exception):
    """Base exception for all converter errors.

    All custom exceptions in the converter inherit from this base class
    to allow catching all tool-specific errors.
    """

    pass


class JMXParseException(Jmx2LrException):
    """Raised when the JMX test plan cannot be loaded.

    This exception is raised when:
    - JMX file does not exist
    - JMX file cannot be read (directory, permissions)
    - XML is malformed
    - Root element is not 'jmeterTestPlan'
    """

    pass


class OutputDirectoryException(Jmx2LrException):
    """Raised when an output directory cannot be created.

    This exception is raised when:
    - The output root directory cannot be created
    - A Thread Group script directory cannot be created
    """

    pass


class ConversionException(Jmx2LrException):
    """Raised when writing a LoadRunner script folder fails.

    This exception is raised when:
    - A script file (Action.c, default.cfg, ...) cannot be written
    - The conversion log cannot be written
    """

    pass


class ConfigException(Jmx2LrException):
    """Raised when converter options are invalid.

    This exception is raised when:
    - Options YAML syntax is invalid
    - Options file contains unknown keys
    - An option value has the wrong type
    """

    pass
