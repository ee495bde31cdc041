"""LoadRunner script folder writers.

Renders and writes the fixed files of a VuGen Web/HTTP script:
vuser_init.c, Action.c, vuser_end.c, default.cfg, parameters.prm and the
plain-text conversion.log.
"""

from pathlib import Path
from typing import Iterator

from jmx2lr.core.data_structures import CsvParameterSet, GroupResult
from jmx2lr.core.text_transform import sanitize_name
from jmx2lr.exceptions import ConversionException

VUSER_INIT = "vuser_init.c"
ACTION = "Action.c"
VUSER_END = "vuser_end.c"
DEFAULT_CFG = "default.cfg"
PARAMETERS_PRM = "parameters.prm"
CONVERSION_LOG = "conversion.log"

C_HEADER = (
    '#include "lrun.h"\n'
    '#include "web_api.h"\n'
    '#include "lrw_custom_body.h"\n'
    "\n"
)


def _write(path: Path, content: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise ConversionException(f"Failed to write {path}: {e}") from e


def render_vuser_init() -> str:
    return (
        C_HEADER
        + "vuser_init()\n{\n"
        + "    // TODO: Add login / init steps if needed\n"
        + "    return 0;\n"
        + "}\n"
    )


def render_vuser_end() -> str:
    return (
        C_HEADER
        + "vuser_end()\n{\n"
        + "    // TODO: Add logout / cleanup if needed\n"
        + "    return 0;\n"
        + "}\n"
    )


def render_action(body: list[str]) -> str:
    """Wrap generated statements into the Action() function."""
    lines = [C_HEADER + "Action()", "{", "    int rc = 0;", ""]
    lines.extend(body)
    lines.extend(["", "    return 0;", "}", ""])
    return "\n".join(lines)


def _parameter_rows(
    parameter_sets: list[CsvParameterSet],
) -> Iterator[tuple[CsvParameterSet, int, str]]:
    """Yield (set, column, variable) for every configured parameter."""
    for parameter_set in parameter_sets:
        for column, variable in parameter_set.columns():
            yield parameter_set, column, variable


def render_default_cfg(parameter_sets: list[CsvParameterSet]) -> str:
    """Render default.cfg with one section per CSV variable."""
    lines = [
        "[General]",
        "DefaultRunLogic=Action",
        "",
        "[Actions]",
        f"vuser_init={VUSER_INIT}",
        f"Action={ACTION}",
        f"vuser_end={VUSER_END}",
        "",
        "[Parameters]",
        "",
    ]
    for parameter_set, column, variable in _parameter_rows(parameter_sets):
        lines.extend(
            [
                f"[{sanitize_name(variable)}]",
                "Type=File",
                f"FileName={parameter_set.data_file}",
                f"Column={column}",
                f"Delimiter={parameter_set.delimiter}",
                "SelectNextRow=Sequential",
                "WhenOutOfRange=Continue",
                "",
            ]
        )
    return "\n".join(lines) + "\n"


def render_prm(parameter_sets: list[CsvParameterSet]) -> str:
    """Render parameters.prm with one [Parameter] block per CSV variable."""
    lines = [
        "; Basic PRM mapping generated from JMeter CSV Data Set Config",
        "; Please open in VuGen and refine as per your LoadRunner version.",
        "",
    ]
    for parameter_set, column, variable in _parameter_rows(parameter_sets):
        lines.extend(
            [
                "[Parameter]",
                f"Name={sanitize_name(variable)}",
                "Type=File",
                f"FileName={parameter_set.data_file}",
                f"Column={column}",
                f"ColumnDelimiter={parameter_set.delimiter}",
                "UpdateMode=Sequential",
                "WhenOutOfRange=Continue",
                "",
            ]
        )
    return "\n".join(lines) + "\n"


def render_conversion_log(result: GroupResult) -> str:
    """Render the human-readable summary of one converted Thread Group."""
    lines = [
        f"ThreadGroup: {result.group_name}",
        f"Script folder: {Path(result.script_dir).resolve()}",
        "",
        "CSV/DAT Parameters:",
    ]
    if not result.parameter_sets:
        lines.append("  (none)")
    for parameter_set in result.parameter_sets:
        lines.append(
            f"  CSV: {parameter_set.file_name}  DAT: {parameter_set.dat_file_name or '-'}"
            f"  Vars: {', '.join(parameter_set.variable_names) or '(none)'}"
            f"  Delimiter: {parameter_set.delimiter}"
        )

    lines.extend(
        [
            "",
            "Generated:",
            f"  Requests: {result.samplers}",
            f"  Transactions: {result.transactions}",
            f"  Correlations: {result.correlations}",
            "",
            "Warnings:",
        ]
    )
    if not result.warnings:
        lines.append("  (none)")
    lines.extend(f"  - {warning}" for warning in result.warnings)

    lines.extend(
        [
            "",
            "Notes:",
            "  - Correlations (Regex, JSON) have been converted to "
            "web_reg_save_param_ex/web_reg_save_param_json.",
            "  - Parameters reference .dat files in default.cfg and parameters.prm.",
            "  - Please open this script in VuGen, check parameters & correlations.",
        ]
    )
    return "\n".join(lines) + "\n"


class ScriptWriter:
    """Write the files of one LoadRunner script folder.

    Example:
        >>> writer = ScriptWriter(Path("out/Script_Users"))
        >>> writer.write_stubs()
        >>> writer.write_action(["    web_url(...);"])
    """

    def __init__(self, script_dir: Path) -> None:
        """Initialize writer.

        Args:
            script_dir: Existing script folder
        """
        self.script_dir = script_dir

    def write_stubs(self) -> None:
        """Write vuser_init.c and vuser_end.c."""
        _write(self.script_dir / VUSER_INIT, render_vuser_init())
        _write(self.script_dir / VUSER_END, render_vuser_end())

    def write_config(self, parameter_sets: list[CsvParameterSet]) -> None:
        """Write default.cfg and parameters.prm."""
        _write(self.script_dir / DEFAULT_CFG, render_default_cfg(parameter_sets))
        _write(self.script_dir / PARAMETERS_PRM, render_prm(parameter_sets))

    def write_action(self, body: list[str]) -> None:
        """Write Action.c around the generated statements."""
        _write(self.script_dir / ACTION, render_action(body))

    def write_log(self, result: GroupResult) -> None:
        """Write conversion.log."""
        _write(self.script_dir / CONVERSION_LOG, render_conversion_log(result))
