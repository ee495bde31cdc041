"""Shared pytest fixtures for all tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Optional
from xml.sax.saxutils import escape

import pytest


def _string_prop(name: str, value: Optional[str]) -> str:
    if value is None:
        return ""
    if value == "":
        return f'<stringProp name="{name}"></stringProp>'
    return f'<stringProp name="{name}">{escape(value)}</stringProp>'


def _attr(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def _tree(children: Optional[tuple[str, ...]]) -> str:
    """Paired hashTree for an element (None = no hashTree at all)."""
    if children is None:
        return ""
    if not children:
        return "<hashTree/>"
    return "<hashTree>" + "".join(children) + "</hashTree>"


class JmxBuilder:
    """Build JMX snippets the way JMeter lays them out.

    Every element is followed by its paired hashTree; pass children=None
    to leave the hashTree out.
    """

    @staticmethod
    def plan(*elements: str) -> str:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<jmeterTestPlan version="1.2" properties="5.0" jmeter="5.6.3">'
            "<hashTree>"
            '<TestPlan guiclass="TestPlanGui" testclass="TestPlan" testname="Test Plan" enabled="true">'
            '<stringProp name="TestPlan.comments"></stringProp>'
            "</TestPlan>"
            "<hashTree>" + "".join(elements) + "</hashTree>"
            "</hashTree>"
            "</jmeterTestPlan>"
        )

    @staticmethod
    def thread_group(
        name: str = "Thread Group",
        *children: str,
        with_tree: bool = True,
    ) -> str:
        return (
            f'<ThreadGroup guiclass="ThreadGroupGui" testclass="ThreadGroup" '
            f'testname="{_attr(name)}" enabled="true">'
            '<stringProp name="ThreadGroup.num_threads">1</stringProp>'
            '<stringProp name="ThreadGroup.ramp_time">1</stringProp>'
            "</ThreadGroup>" + _tree(children if with_tree else None)
        )

    @staticmethod
    def transaction(
        name: str = "Transaction",
        *children: str,
        with_tree: bool = True,
    ) -> str:
        return (
            f'<TransactionController guiclass="TransactionControllerGui" '
            f'testclass="TransactionController" testname="{_attr(name)}" enabled="true">'
            '<boolProp name="TransactionController.includeTimers">false</boolProp>'
            "</TransactionController>" + _tree(children if with_tree else None)
        )

    @staticmethod
    def sampler(
        name: str = "Request",
        method: Optional[str] = "GET",
        domain: Optional[str] = "host",
        path: Optional[str] = "/path",
        protocol: Optional[str] = "http",
        port: Optional[str] = "",
        arguments: tuple[tuple[str, str], ...] = (),
        raw_body: bool = False,
        children: Optional[tuple[str, ...]] = (),
    ) -> str:
        args = "".join(
            f'<elementProp name="{_attr(arg_name)}" elementType="HTTPArgument">'
            '<boolProp name="HTTPArgument.always_encode">false</boolProp>'
            + _string_prop("Argument.value", arg_value)
            + '<stringProp name="Argument.metadata">=</stringProp>'
            + _string_prop("Argument.name", arg_name)
            + "</elementProp>"
            for arg_name, arg_value in arguments
        )
        raw = '<boolProp name="HTTPSampler.postBodyRaw">true</boolProp>' if raw_body else ""
        return (
            f'<HTTPSamplerProxy guiclass="HttpTestSampleGui" testclass="HTTPSamplerProxy" '
            f'testname="{_attr(name)}" enabled="true">'
            + raw
            + '<elementProp name="HTTPsampler.Arguments" elementType="Arguments" '
            'guiclass="HTTPArgumentsPanel" testclass="Arguments" enabled="true">'
            '<collectionProp name="Arguments.arguments">' + args + "</collectionProp>"
            "</elementProp>"
            + _string_prop("HTTPSampler.domain", domain)
            + _string_prop("HTTPSampler.port", port)
            + _string_prop("HTTPSampler.protocol", protocol)
            + _string_prop("HTTPSampler.path", path)
            + _string_prop("HTTPSampler.method", method)
            + '<boolProp name="HTTPSampler.follow_redirects">true</boolProp>'
            "</HTTPSamplerProxy>" + _tree(children)
        )

    @staticmethod
    def regex_extractor(refname: Optional[str], regex: Optional[str]) -> str:
        return (
            '<RegexExtractor guiclass="RegexExtractorGui" testclass="RegexExtractor" '
            'testname="Regular Expression Extractor" enabled="true">'
            + _string_prop("RegexExtractor.refname", refname)
            + _string_prop("RegexExtractor.regex", regex)
            + '<stringProp name="RegexExtractor.template">$1$</stringProp>'
            "</RegexExtractor><hashTree/>"
        )

    @staticmethod
    def json_extractor(
        reference_name: Optional[str],
        json_path: Optional[str],
        plural_keys: bool = True,
    ) -> str:
        suffix = "s" if plural_keys else ""
        return (
            '<JSONPostProcessor guiclass="JSONPostProcessorGui" testclass="JSONPostProcessor" '
            'testname="JSON Extractor" enabled="true">'
            + _string_prop(f"JSONPostProcessor.referenceName{suffix}", reference_name)
            + _string_prop(f"JSONPostProcessor.jsonPathExpr{suffix}", json_path)
            + '<stringProp name="JSONPostProcessor.match_numbers"></stringProp>'
            "</JSONPostProcessor><hashTree/>"
        )

    @staticmethod
    def csv_data_set(
        filename: Optional[str],
        variable_names: Optional[str],
        delimiter: Optional[str] = None,
        name: str = "CSV Data Set Config",
    ) -> str:
        return (
            f'<CSVDataSet guiclass="TestBeanGUI" testclass="CSVDataSet" '
            f'testname="{_attr(name)}" enabled="true">'
            + _string_prop("filename", filename)
            + _string_prop("variableNames", variable_names)
            + _string_prop("delimiter", delimiter)
            + '<boolProp name="recycle">true</boolProp>'
            "</CSVDataSet><hashTree/>"
        )

    @staticmethod
    def header_manager() -> str:
        return (
            '<HeaderManager guiclass="HeaderPanel" testclass="HeaderManager" '
            'testname="HTTP Header Manager" enabled="true">'
            '<collectionProp name="HeaderManager.headers"/>'
            "</HeaderManager><hashTree/>"
        )


@pytest.fixture
def jmx() -> type[JmxBuilder]:
    """JMX snippet builder."""
    return JmxBuilder


@pytest.fixture
def write_jmx(tmp_path: Path) -> Callable[..., Path]:
    """Write JMX content into the temporary directory.

    Returns:
        Function (content, name="plan.jmx") -> Path of written file
    """

    def _write(content: str, name: str = "plan.jmx") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Output root for generated scripts (not created yet)."""
    return tmp_path / "lr_out"


@pytest.fixture
def users_csv(tmp_path: Path) -> Path:
    """CSV data file next to the JMX files."""
    path = tmp_path / "users.csv"
    path.write_text("alice;secret;1\nbob;hunter2;2\n", encoding="utf-8")
    return path
