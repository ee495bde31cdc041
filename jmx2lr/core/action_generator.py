"""Action.c body generation.

Walks a Thread Group's hashTree depth-first and emits LoadRunner code for
the elements the converter understands:

- HTTPSamplerProxy -> web_url / web_submit_data / web_custom_request
- TransactionController -> lr_start_transaction / lr_end_transaction

Every other element is ignored. A sampler outside any transaction
controller gets its own transaction named after the sampler.
"""

import itertools
import logging
import xml.etree.ElementTree as ET
from typing import Optional

from jmx2lr.core.correlation import (
    extract_correlations,
    render_json_correlation,
    render_regex_correlation,
)
from jmx2lr.core.data_structures import RequestSpec
from jmx2lr.core.http_arguments import append_query_string, build_request_spec
from jmx2lr.core.jmx_loader import get_test_name
from jmx2lr.core.options import ConverterOptions
from jmx2lr.core.plan_tree import HTTP_SAMPLER, TRANSACTION_CONTROLLER, PlanTree
from jmx2lr.core.text_transform import escape_for_c, to_c_literal

logger = logging.getLogger(__name__)


class NameCounter:
    """Fallback names for elements with a blank testname.

    One counter is shared by a whole conversion run, so generated names are
    unique within the run and identical across runs on the same plan.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def next(self, prefix: str) -> str:
        """Return the next name for prefix (e.g., "Txn_1", "Request_2")."""
        return f"{prefix}_{next(self._counter)}"


def start_transaction(name: str) -> list[str]:
    return [f'    lr_start_transaction("{escape_for_c(name)}");', ""]


def end_transaction(name: str) -> list[str]:
    return [f'    lr_end_transaction("{escape_for_c(name)}", LR_AUTO);', ""]


def render_request(request: RequestSpec) -> list[str]:
    """Render the LoadRunner request statement for a sampler.

    GET requests become web_url with arguments in the query string. Other
    methods become web_custom_request for a raw body or no arguments, and
    web_submit_data for name/value arguments.

    Args:
        request: Request read from the sampler

    Returns:
        Code lines, ending with a blank line
    """
    name = escape_for_c(request.name)
    method = escape_for_c(request.method)
    base_url = to_c_literal(request.base_url)

    if request.is_get:
        url = to_c_literal(append_query_string(request.base_url, request.arguments))
        return [
            f'    web_url("{name}",',
            f'        "URL={url}",',
            '        "TargetFrame=",',
            '        "Resource=0",',
            '        "Mode=HTTP",',
            "        LAST);",
            "",
        ]

    if request.post_body_raw:
        body = request.arguments[0].value if request.arguments else ""
        return [
            f'    web_custom_request("{name}",',
            f'        "URL={base_url}",',
            f'        "Method={method}",',
            '        "Resource=0",',
            '        "Mode=HTTP",',
            f'        "Body={to_c_literal(body)}",',
            "        LAST);",
            "",
        ]

    if request.arguments:
        lines = [
            f'    web_submit_data("{name}",',
            f'        "Action={base_url}",',
            f'        "Method={method}",',
            '        "TargetFrame=",',
            '        "Resource=0",',
            '        "Mode=HTTP",',
            "        ITEMDATA,",
        ]
        for arg in request.arguments:
            lines.append(
                f'        "Name={to_c_literal(arg.name)}", '
                f'"Value={to_c_literal(arg.value)}", ENDITEM,'
            )
        lines.extend(["        LAST);", ""])
        return lines

    return [
        f'    web_custom_request("{name}",',
        f'        "URL={base_url}",',
        f'        "Method={method}",',
        '        "Resource=0",',
        '        "Mode=HTTP",',
        "        LAST);",
        "",
    ]


class ActionGenerator:
    """Generate the Action() body for one Thread Group.

    Example:
        >>> generator = ActionGenerator(plan, ConverterOptions(), NameCounter())
        >>> lines = generator.generate(plan.children_of(thread_group))
        >>> generator.samplers, generator.warnings
    """

    def __init__(
        self,
        plan: PlanTree,
        options: Optional[ConverterOptions] = None,
        names: Optional[NameCounter] = None,
    ) -> None:
        """Initialize generator.

        Args:
            plan: Indexed test plan
            options: Converter options (defaults when not provided)
            names: Fallback name source shared by the conversion run
        """
        self.plan = plan
        self.options = options or ConverterOptions()
        self.names = names or NameCounter()
        self.samplers = 0
        self.transactions = 0
        self.correlations = 0
        self.warnings: list[str] = []

    def generate(self, container: Optional[ET.Element]) -> list[str]:
        """Generate code lines for every element under container.

        Args:
            container: Thread Group hashTree (None yields no code)

        Returns:
            Code lines of the Action() body
        """
        out: list[str] = []
        if container is not None:
            self.walk(container, out, inside_transaction=False)
        return out

    def walk(
        self,
        container: ET.Element,
        out: list[str],
        inside_transaction: bool,
    ) -> None:
        """Emit code for container's elements, depth-first, in document order."""
        consumed: Optional[ET.Element] = None

        for element in container:
            if element is consumed:
                # Already processed as the children of the previous element
                continue

            if element.tag == HTTP_SAMPLER:
                self._sampler(element, out, inside_transaction)
                consumed = self.plan.children_of(element)
            elif element.tag == TRANSACTION_CONTROLLER:
                self._transaction(element, out)
                consumed = self.plan.children_of(element)
            elif not self.plan.is_hash_tree(element):
                logger.debug("Skipping unsupported element <%s>", element.tag)

    def _transaction(self, controller: ET.Element, out: list[str]) -> None:
        name = get_test_name(controller) or self.names.next("Txn")
        self.transactions += 1

        out.extend(start_transaction(name))

        children = self.plan.children_of(controller)
        if children is not None:
            self.walk(children, out, inside_transaction=True)
        else:
            self._warn(f"TransactionController '{name}' has no hashTree.")

        out.extend(end_transaction(name))

    def _sampler(self, sampler: ET.Element, out: list[str], inside_transaction: bool) -> None:
        name = get_test_name(sampler) or self.names.next("Request")
        request = build_request_spec(sampler, name)
        self.samplers += 1

        # Registrations must precede the request they apply to
        if self.options.enable_correlation:
            regex_corrs, json_corrs = extract_correlations(self.plan, sampler)
            for regex_corr in regex_corrs:
                out.extend(render_regex_correlation(regex_corr))
            for json_corr in json_corrs:
                out.extend(render_json_correlation(json_corr))
            self.correlations += len(regex_corrs) + len(json_corrs)

        if not inside_transaction:
            self.transactions += 1
            out.extend(start_transaction(name))

        out.extend(render_request(request))

        if not inside_transaction:
            out.extend(end_transaction(name))

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)
