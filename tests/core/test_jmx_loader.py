"""Tests for jmx_loader module."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from jmx2lr.core.jmx_loader import get_bool_prop, get_string_prop, get_test_name, load_jmx
from jmx2lr.exceptions import JMXParseException


class TestLoadJmx:
    """Tests for load_jmx()."""

    def test_load_valid(self, jmx, write_jmx):
        """Test loading a valid JMX file."""
        path = write_jmx(jmx.plan(jmx.thread_group("TG")))

        tree = load_jmx(str(path))

        assert tree.getroot().tag == "jmeterTestPlan"

    def test_file_not_found(self, tmp_path: Path):
        """Test missing file raises JMXParseException."""
        with pytest.raises(JMXParseException) as exc_info:
            load_jmx(str(tmp_path / "missing.jmx"))

        assert "does not exist" in str(exc_info.value)

    def test_invalid_xml(self, write_jmx):
        """Test malformed XML raises JMXParseException."""
        path = write_jmx("<jmeterTestPlan><hashTree>")

        with pytest.raises(JMXParseException):
            load_jmx(str(path))

    def test_wrong_root_element(self, write_jmx):
        """Test a non-JMX XML document is rejected."""
        path = write_jmx("<project></project>")

        with pytest.raises(JMXParseException) as exc_info:
            load_jmx(str(path))

        assert "expected 'jmeterTestPlan'" in str(exc_info.value)

    def test_directory_path(self, tmp_path: Path):
        """Test a directory in place of the JMX file raises JMXParseException."""
        path = tmp_path / "plan.jmx"
        path.mkdir()

        with pytest.raises(JMXParseException) as exc_info:
            load_jmx(str(path))

        assert "Failed to read JMX file" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)


class TestPropertyLookup:
    """Tests for get_string_prop(), get_bool_prop() and get_test_name()."""

    @pytest.fixture
    def element(self) -> ET.Element:
        return ET.fromstring(
            '<HTTPSamplerProxy testname="  ">'
            '<stringProp name="HTTPSampler.path">/users</stringProp>'
            '<stringProp name="HTTPSampler.port"></stringProp>'
            '<boolProp name="HTTPSampler.postBodyRaw"> TRUE </boolProp>'
            '<boolProp name="HTTPSampler.follow_redirects">false</boolProp>'
            '<elementProp name="nested">'
            '<stringProp name="Argument.value">deep</stringProp>'
            "</elementProp>"
            "</HTTPSamplerProxy>"
        )

    def test_string_prop_found(self, element: ET.Element):
        """Test direct stringProp lookup by name."""
        assert get_string_prop(element, "HTTPSampler.path") == "/users"

    def test_string_prop_empty_is_not_absent(self, element: ET.Element):
        """Test an empty property returns '' rather than None."""
        assert get_string_prop(element, "HTTPSampler.port") == ""

    def test_string_prop_missing(self, element: ET.Element):
        """Test a missing property returns None."""
        assert get_string_prop(element, "HTTPSampler.domain") is None

    def test_string_prop_not_recursive(self, element: ET.Element):
        """Test nested properties are not matched."""
        assert get_string_prop(element, "Argument.value") is None

    def test_bool_prop(self, element: ET.Element):
        """Test boolProp parsing is trimmed and case-insensitive."""
        assert get_bool_prop(element, "HTTPSampler.postBodyRaw") is True
        assert get_bool_prop(element, "HTTPSampler.follow_redirects") is False
        assert get_bool_prop(element, "HTTPSampler.missing") is False
        assert get_bool_prop(element, "HTTPSampler.missing", default=True) is True

    def test_blank_test_name(self, element: ET.Element):
        """Test a whitespace-only testname counts as missing."""
        assert get_test_name(element) is None

    def test_test_name_kept_verbatim(self):
        """Test a non-blank testname is returned untrimmed."""
        element = ET.fromstring('<TransactionController testname=" Login "/>')
        assert get_test_name(element) == " Login "
