"""Core modules for the JMX to LoadRunner converter."""

from jmx2lr.core.action_generator import ActionGenerator, NameCounter
from jmx2lr.core.converter import JMXToLoadRunnerConverter, convert, inspect_jmx
from jmx2lr.core.csv_dataset import CsvDataSetResolver
from jmx2lr.core.data_structures import (
    ConversionResult,
    CsvParameterSet,
    GroupResult,
    HttpArgument,
    JsonCorrelation,
    RegexCorrelation,
    RequestSpec,
)
from jmx2lr.core.jmx_loader import load_jmx
from jmx2lr.core.options import ConverterOptions, load_options
from jmx2lr.core.plan_tree import PlanTree
from jmx2lr.core.script_writer import ScriptWriter

__all__ = [
    "ActionGenerator",
    "NameCounter",
    "JMXToLoadRunnerConverter",
    "convert",
    "inspect_jmx",
    "CsvDataSetResolver",
    "PlanTree",
    "ScriptWriter",
    "load_jmx",
    "ConverterOptions",
    "load_options",
    # data structures
    "ConversionResult",
    "CsvParameterSet",
    "GroupResult",
    "HttpArgument",
    "JsonCorrelation",
    "RegexCorrelation",
    "RequestSpec",
]
