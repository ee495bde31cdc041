"""CSV Data Set Config resolution.

Finds every CSVDataSet of the test plan, copies its data file into a
LoadRunner script folder next to a .dat copy of the same content, and
records the column -> variable mapping used by default.cfg and
parameters.prm.
"""

import logging
import shutil
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Optional

from jmx2lr.core.data_structures import CsvParameterSet
from jmx2lr.core.jmx_loader import get_string_prop, get_test_name
from jmx2lr.core.plan_tree import PlanTree

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
DAT_SUFFIX = ".dat"


def split_variable_names(variable_names: str) -> list[str]:
    """Split a CSVDataSet variableNames value into trimmed, non-empty names."""
    if not variable_names:
        return []
    return [name.strip() for name in variable_names.split(",") if name.strip()]


def dat_file_name(csv_name: str) -> str:
    """Return the .dat name for a CSV file name (users.csv -> users.dat)."""
    dot = csv_name.rfind(".")
    base = csv_name[:dot] if dot > 0 else csv_name
    return base + DAT_SUFFIX


class CsvDataSetResolver:
    """Materialize CSV data sets inside script folders.

    Problems with a single data set are reported as warnings and never
    stop the conversion.

    Example:
        >>> resolver = CsvDataSetResolver(Path("plans"))
        >>> sets, warnings = resolver.resolve(plan, Path("out/Script_Users"))
    """

    def __init__(self, jmx_dir: Path, write_dat_files: bool = True) -> None:
        """Initialize resolver.

        Args:
            jmx_dir: Directory of the JMX file, base for relative CSV paths
            write_dat_files: Also write a .dat copy of every CSV file
        """
        self.jmx_dir = jmx_dir
        self.write_dat_files = write_dat_files

    def resolve(
        self, plan: PlanTree, script_dir: Path
    ) -> tuple[list[CsvParameterSet], list[str]]:
        """Copy every CSV data set of the plan into script_dir.

        Args:
            plan: Indexed test plan (the whole document is scanned)
            script_dir: Target script folder

        Returns:
            Tuple of (parameter sets, warnings)
        """
        sets: list[CsvParameterSet] = []
        warnings: list[str] = []

        for index, element in enumerate(plan.csv_data_sets(), 1):
            parameter_set = self._resolve_one(element, index, script_dir, warnings)
            if parameter_set is not None:
                sets.append(parameter_set)

        return sets, warnings

    def _resolve_one(
        self,
        element: ET.Element,
        index: int,
        script_dir: Path,
        warnings: list[str],
    ) -> Optional[CsvParameterSet]:
        filename = get_string_prop(element, "filename")
        variable_names = get_string_prop(element, "variableNames")
        delimiter = get_string_prop(element, "delimiter")

        if filename is None or not filename.strip():
            name = get_test_name(element) or f"CSVDataSet #{index}"
            self._warn(warnings, f"CSV Data Set '{name}' has no filename, skipped.")
            return None

        source = Path(filename.strip())
        if not source.is_absolute():
            source = self.jmx_dir / source
        if not source.exists():
            self._warn(warnings, f"CSV file not found: {source.resolve()}")
            return None

        csv_target = script_dir / source.name
        self._copy(source, csv_target, warnings)

        dat_name = None
        if self.write_dat_files:
            dat_name = dat_file_name(csv_target.name)
            self._copy(source, script_dir / dat_name, warnings)

        return CsvParameterSet(
            file_name=csv_target.name,
            dat_file_name=dat_name,
            variable_names=split_variable_names(variable_names or ""),
            delimiter=delimiter if delimiter else DEFAULT_DELIMITER,
        )

    def _copy(self, source: Path, target: Path, warnings: list[str]) -> None:
        try:
            shutil.copy2(source, target)
        except OSError as e:
            self._warn(warnings, f"Failed to copy {source} to {target}: {e}")

    @staticmethod
    def _warn(warnings: list[str], message: str) -> None:
        logger.warning(message)
        warnings.append(message)


def describe_csv_data_sets(plan: PlanTree) -> list[dict[str, Any]]:
    """List the CSV data sets of a plan without touching the file system.

    Returns:
        List of dictionaries with keys: name, filename, variable_names, delimiter
    """
    described = []
    for index, element in enumerate(plan.csv_data_sets(), 1):
        delimiter = get_string_prop(element, "delimiter")
        described.append(
            {
                "name": get_test_name(element) or f"CSVDataSet #{index}",
                "filename": get_string_prop(element, "filename") or "",
                "variable_names": split_variable_names(
                    get_string_prop(element, "variableNames") or ""
                ),
                "delimiter": delimiter if delimiter else DEFAULT_DELIMITER,
            }
        )
    return described
