"""JMX to LoadRunner Converter - Generate VuGen Web/HTTP scripts from JMeter test plans."""

__version__ = "1.0.0"

from jmx2lr.core.converter import JMXToLoadRunnerConverter, convert
from jmx2lr.core.data_structures import ConversionResult, GroupResult
from jmx2lr.core.options import ConverterOptions, load_options

__all__ = [
    "JMXToLoadRunnerConverter",
    "convert",
    "ConversionResult",
    "GroupResult",
    "ConverterOptions",
    "load_options",
]
