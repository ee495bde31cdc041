"""JMX to LoadRunner Web/HTTP converter.

Creates one LoadRunner script folder per Thread Group of a JMeter test
plan:

- HTTP samplers -> web_url / web_submit_data / web_custom_request
- Transaction controllers -> lr_start_transaction / lr_end_transaction
- RegexExtractor / JSONPostProcessor -> web_reg_save_param_ex / _json
- CSV Data Set Config -> copied CSV + .dat file, default.cfg and
  parameters.prm entries
- JMeter ${var} -> LoadRunner {var}
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Optional, Union

from jmx2lr.core.action_generator import ActionGenerator, NameCounter
from jmx2lr.core.csv_dataset import CsvDataSetResolver, describe_csv_data_sets
from jmx2lr.core.data_structures import ConversionResult, GroupResult
from jmx2lr.core.jmx_loader import get_test_name, load_jmx
from jmx2lr.core.options import ConverterOptions
from jmx2lr.core.plan_tree import PlanTree
from jmx2lr.core.script_writer import ScriptWriter
from jmx2lr.core.text_transform import sanitize_name
from jmx2lr.exceptions import Jmx2LrException, OutputDirectoryException

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class JMXToLoadRunnerConverter:
    """Convert JMeter JMX test plans into LoadRunner script folders.

    A run stops only on fatal errors: unreadable JMX file or an output
    directory that cannot be created. Everything else is collected as
    warnings, written to each folder's conversion.log and returned in the
    ConversionResult.

    Example:
        >>> converter = JMXToLoadRunnerConverter()
        >>> result = converter.convert("plan.jmx", "lr_scripts")
        >>> print(result.success, [s.script_dir for s in result.scripts])
    """

    def __init__(self, options: Optional[ConverterOptions] = None) -> None:
        """Initialize converter.

        Args:
            options: Converter options (defaults when not provided)
        """
        self.options = options or ConverterOptions()

    def convert(self, jmx_path: PathLike, output_dir: PathLike) -> ConversionResult:
        """Convert every Thread Group of a JMX file.

        Args:
            jmx_path: Path to JMX file
            output_dir: Root folder for the generated script folders

        Returns:
            ConversionResult; success is False and error is set when a fatal
            error stopped the run. Script folders written before the error
            are listed in scripts.
        """
        result = ConversionResult(
            success=False,
            jmx_path=str(jmx_path),
            output_dir=str(output_dir),
        )

        try:
            self._convert(Path(jmx_path), Path(output_dir), result)
        except Jmx2LrException as e:
            logger.error("Conversion failed: %s", e)
            result.error = str(e)
            return result

        result.success = True
        return result

    def _convert(self, jmx_path: Path, output_dir: Path, result: ConversionResult) -> None:
        tree = load_jmx(str(jmx_path))
        self._make_dir(output_dir, "output directory")

        plan = PlanTree(tree.getroot())
        thread_groups = plan.thread_groups()
        if not thread_groups:
            message = "No ThreadGroup elements found in JMX."
            logger.warning(message)
            result.warnings.append(message)

        resolver = CsvDataSetResolver(
            jmx_path.resolve().parent,
            write_dat_files=self.options.write_dat_files,
        )
        names = NameCounter()
        used_dirs: set[str] = set()

        for index, thread_group in enumerate(thread_groups, 1):
            group_result = self._convert_thread_group(
                thread_group, index, plan, resolver, names, output_dir, used_dirs
            )
            result.scripts.append(group_result)
            result.warnings.extend(group_result.warnings)

    def _convert_thread_group(
        self,
        thread_group: ET.Element,
        index: int,
        plan: PlanTree,
        resolver: CsvDataSetResolver,
        names: NameCounter,
        output_dir: Path,
        used_dirs: set[str],
    ) -> GroupResult:
        """Write the script folder of one Thread Group.

        Args:
            thread_group: ThreadGroup element
            index: 1-based position of the Thread Group in the plan
            plan: Indexed test plan
            resolver: CSV resolver bound to the JMX directory
            names: Fallback name source of the run
            output_dir: Root folder for script folders
            used_dirs: Folder names already taken in this run

        Returns:
            GroupResult for the written folder

        Raises:
            OutputDirectoryException: Script folder cannot be created
            ConversionException: A script file cannot be written
        """
        group_name = get_test_name(thread_group) or f"ThreadGroup_{index}"
        script_dir = output_dir / self._script_dir_name(group_name, used_dirs)
        self._make_dir(script_dir, "script directory")
        logger.info("Converting ThreadGroup '%s' into %s", group_name, script_dir)

        group_result = GroupResult(group_name=group_name, script_dir=str(script_dir))

        parameter_sets, csv_warnings = resolver.resolve(plan, script_dir)
        group_result.parameter_sets = parameter_sets
        group_result.warnings.extend(csv_warnings)

        writer = ScriptWriter(script_dir)
        writer.write_stubs()
        writer.write_config(parameter_sets)

        generator = ActionGenerator(plan, self.options, names)
        container = plan.children_of(thread_group)
        if container is None:
            message = f"No hashTree found for ThreadGroup '{group_name}'."
            logger.warning(message)
            group_result.warnings.append(message)
        writer.write_action(generator.generate(container))

        group_result.samplers = generator.samplers
        group_result.transactions = generator.transactions
        group_result.correlations = generator.correlations
        group_result.warnings.extend(generator.warnings)

        writer.write_log(group_result)
        return group_result

    def _script_dir_name(self, group_name: str, used_dirs: set[str]) -> str:
        base = sanitize_name(self.options.script_prefix + group_name)
        dir_name = base
        suffix = 2
        # Windows file systems are case-insensitive
        while dir_name.lower() in used_dirs:
            dir_name = f"{base}_{suffix}"
            suffix += 1
        used_dirs.add(dir_name.lower())
        return dir_name

    @staticmethod
    def _make_dir(path: Path, what: str) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryException(f"Unable to create {what}: {path} ({e})") from e


def convert(
    jmx_path: PathLike,
    output_dir: PathLike,
    options: Optional[ConverterOptions] = None,
) -> ConversionResult:
    """Convert a JMX file into LoadRunner script folders.

    Shortcut for JMXToLoadRunnerConverter(options).convert(...).
    """
    return JMXToLoadRunnerConverter(options).convert(jmx_path, output_dir)


def inspect_jmx(jmx_path: PathLike) -> dict[str, Any]:
    """Describe what a conversion of jmx_path would produce.

    Args:
        jmx_path: Path to JMX file

    Returns:
        Dictionary with keys: jmx_path, thread_groups, csv_data_sets

    Raises:
        JMXParseException: If the file is missing or invalid
    """
    plan = PlanTree(load_jmx(str(jmx_path)).getroot())
    return {
        "jmx_path": str(jmx_path),
        "thread_groups": plan.describe(),
        "csv_data_sets": describe_csv_data_sets(plan),
    }
