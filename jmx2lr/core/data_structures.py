"""Data structures for JMX to LoadRunner conversion.

This module defines dataclasses used while walking a JMX test plan,
generating LoadRunner code and reporting conversion results.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class HttpArgument:
    """Single name/value argument of an HTTP sampler.

    Attributes:
        name: Argument name (empty string when not set)
        value: Argument value (empty string when not set)
    """

    name: str = ""
    value: str = ""


@dataclass
class RequestSpec:
    """HTTP request derived from an HTTPSamplerProxy element.

    Attributes:
        name: Sampler display name
        method: HTTP method as written in the plan (e.g., "GET", "POST")
        base_url: protocol://domain[:port][/path]
        arguments: Ordered argument list, duplicates preserved
        post_body_raw: True when the body is a single raw payload
    """

    name: str
    method: str
    base_url: str
    arguments: list[HttpArgument] = field(default_factory=list)
    post_body_raw: bool = False

    @property
    def is_get(self) -> bool:
        """Whether the request uses the GET method."""
        return self.method.upper() == "GET"


@dataclass
class RegexCorrelation:
    """RegexExtractor converted to web_reg_save_param_ex."""

    param_name: str
    regex: str


@dataclass
class JsonCorrelation:
    """JSONPostProcessor converted to web_reg_save_param_json."""

    param_name: str
    json_path: str


@dataclass
class CsvParameterSet:
    """CSV Data Set Config materialized inside a script folder.

    Attributes:
        file_name: CSV file name as copied into the script folder
        dat_file_name: Generated .dat file name (None when not written)
        variable_names: Variable names, column N is variable_names[N - 1]
        delimiter: Field delimiter (default: ",")
    """

    file_name: str
    dat_file_name: Optional[str] = None
    variable_names: list[str] = field(default_factory=list)
    delimiter: str = ","

    @property
    def data_file(self) -> str:
        """File referenced by LoadRunner parameters (.dat preferred)."""
        return self.dat_file_name if self.dat_file_name is not None else self.file_name

    def columns(self) -> list[tuple[int, str]]:
        """Return (1-based column, variable name) pairs."""
        return [(index, name) for index, name in enumerate(self.variable_names, 1)]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_name": self.file_name,
            "dat_file_name": self.dat_file_name,
            "variable_names": self.variable_names,
            "delimiter": self.delimiter,
        }


@dataclass
class GroupResult:
    """Result of converting one Thread Group into a script folder.

    Attributes:
        group_name: Thread Group display name
        script_dir: Path of the generated script folder
        parameter_sets: CSV parameter sets materialized in the folder
        samplers: Number of HTTP samplers converted
        transactions: Number of transaction scopes emitted (explicit + implicit)
        correlations: Number of correlation directives emitted
        warnings: Warnings raised while converting this group
    """

    group_name: str
    script_dir: str
    parameter_sets: list[CsvParameterSet] = field(default_factory=list)
    samplers: int = 0
    transactions: int = 0
    correlations: int = 0
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "group_name": self.group_name,
            "script_dir": self.script_dir,
            "parameter_sets": [s.to_dict() for s in self.parameter_sets],
            "samplers": self.samplers,
            "transactions": self.transactions,
            "correlations": self.correlations,
            "warnings": self.warnings,
        }


@dataclass
class ConversionResult:
    """Outcome of a whole conversion run.

    Attributes:
        success: False only when a fatal error stopped the run
        jmx_path: Input JMX path
        output_dir: Output root directory
        scripts: One GroupResult per generated script folder
        warnings: All warnings of the run, in emission order
        error: Fatal error message when success is False
    """

    success: bool
    jmx_path: str
    output_dir: str
    scripts: list[GroupResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "jmx_path": self.jmx_path,
            "output_dir": self.output_dir,
            "scripts": [s.to_dict() for s in self.scripts],
            "warnings": self.warnings,
            "error": self.error,
        }
