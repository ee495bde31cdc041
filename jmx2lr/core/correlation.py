"""Correlation extraction for HTTP samplers.

Converts the post-processors attached directly to a sampler into
LoadRunner registration functions:

- RegexExtractor -> web_reg_save_param_ex(RegExp=...)
- JSONPostProcessor -> web_reg_save_param_json(QueryString=...)

Only the sampler's own hashTree is scanned. Extractors nested deeper
(e.g., under a child controller) belong to other elements.
"""

import xml.etree.ElementTree as ET
from typing import Optional

from jmx2lr.core.data_structures import JsonCorrelation, RegexCorrelation
from jmx2lr.core.jmx_loader import get_string_prop
from jmx2lr.core.plan_tree import JSON_POST_PROCESSOR, REGEX_EXTRACTOR, PlanTree
from jmx2lr.core.text_transform import escape_for_c, to_c_literal

# JMeter 5 writes the plural keys; older plans use the singular ones
JSON_NAME_PROPS = ("JSONPostProcessor.referenceNames", "JSONPostProcessor.referenceName")
JSON_PATH_PROPS = ("JSONPostProcessor.jsonPathExprs", "JSONPostProcessor.jsonPathExpr")


def _first_prop(element: ET.Element, names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = get_string_prop(element, name)
        if value is not None:
            return value
    return None


def _is_filled(*values: Optional[str]) -> bool:
    return all(value is not None and value.strip() for value in values)


def extract_regex_correlations(plan: PlanTree, sampler: ET.Element) -> list[RegexCorrelation]:
    """Collect RegexExtractors placed directly under sampler.

    Extractors missing the reference name or the expression are dropped.
    """
    result: list[RegexCorrelation] = []
    for element in plan.iter_children(plan.children_of(sampler)):
        if element.tag != REGEX_EXTRACTOR:
            continue
        param_name = get_string_prop(element, "RegexExtractor.refname")
        regex = get_string_prop(element, "RegexExtractor.regex")
        if _is_filled(param_name, regex):
            result.append(RegexCorrelation(param_name=param_name, regex=regex))
    return result


def extract_json_correlations(plan: PlanTree, sampler: ET.Element) -> list[JsonCorrelation]:
    """Collect JSONPostProcessors placed directly under sampler.

    Post-processors missing the reference name or the JSONPath are dropped.
    """
    result: list[JsonCorrelation] = []
    for element in plan.iter_children(plan.children_of(sampler)):
        if element.tag != JSON_POST_PROCESSOR:
            continue
        param_name = _first_prop(element, JSON_NAME_PROPS)
        json_path = _first_prop(element, JSON_PATH_PROPS)
        if _is_filled(param_name, json_path):
            result.append(JsonCorrelation(param_name=param_name, json_path=json_path))
    return result


def extract_correlations(
    plan: PlanTree, sampler: ET.Element
) -> tuple[list[RegexCorrelation], list[JsonCorrelation]]:
    """Return (regex correlations, JSON correlations) for sampler."""
    return extract_regex_correlations(plan, sampler), extract_json_correlations(plan, sampler)


def render_regex_correlation(correlation: RegexCorrelation) -> list[str]:
    """Render a web_reg_save_param_ex call."""
    return [
        "    web_reg_save_param_ex(",
        f'        "ParamName={escape_for_c(correlation.param_name)}",',
        f'        "RegExp={to_c_literal(correlation.regex)}",',
        "        LAST);",
        "",
    ]


def render_json_correlation(correlation: JsonCorrelation) -> list[str]:
    """Render a web_reg_save_param_json call."""
    return [
        "    web_reg_save_param_json(",
        f'        "ParamName={escape_for_c(correlation.param_name)}",',
        f'        "QueryString={to_c_literal(correlation.json_path)}",',
        "        LAST);",
        "",
    ]
