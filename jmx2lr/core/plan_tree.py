"""Index of the JMX parent/child pairing convention.

JMeter does not nest test elements inside each other. A test element is
followed by a sibling <hashTree> holding its children:

    <ThreadGroup .../>
    <hashTree>
      <HTTPSamplerProxy .../>
      <hashTree>
        <RegexExtractor .../>
        <hashTree/>
      </hashTree>
    </hashTree>

PlanTree resolves this pairing once for the whole document so callers can
ask for an element's children container directly.
"""

import xml.etree.ElementTree as ET
from typing import Any, Iterator, Optional

from jmx2lr.core.jmx_loader import get_test_name

HASH_TREE = "hashTree"
THREAD_GROUP = "ThreadGroup"
HTTP_SAMPLER = "HTTPSamplerProxy"
TRANSACTION_CONTROLLER = "TransactionController"
REGEX_EXTRACTOR = "RegexExtractor"
JSON_POST_PROCESSOR = "JSONPostProcessor"
CSV_DATA_SET = "CSVDataSet"


class PlanTree:
    """Resolve test elements to their children containers.

    Example:
        >>> plan = PlanTree(load_jmx("test.jmx").getroot())
        >>> for group in plan.thread_groups():
        ...     container = plan.children_of(group)
    """

    def __init__(self, root: ET.Element) -> None:
        """Build the element -> hashTree index in one pass over the document.

        Args:
            root: Root element of the JMX document
        """
        self.root = root
        self._containers: dict[ET.Element, ET.Element] = {}

        for parent in root.iter():
            children = list(parent)
            for i, child in enumerate(children[:-1]):
                if child.tag == HASH_TREE:
                    continue
                # Only the first following element sibling can be the container
                sibling = children[i + 1]
                if sibling.tag == HASH_TREE:
                    self._containers[child] = sibling

    def children_of(self, element: ET.Element) -> Optional[ET.Element]:
        """Return the hashTree holding element's children, or None."""
        return self._containers.get(element)

    def is_hash_tree(self, element: ET.Element) -> bool:
        """Whether element is a hashTree, paired or not."""
        return element.tag == HASH_TREE

    def iter_children(self, container: Optional[ET.Element]) -> Iterator[ET.Element]:
        """Yield the test elements of a container, skipping hashTrees."""
        if container is None:
            return
        for child in container:
            if self.is_hash_tree(child):
                continue
            yield child

    def thread_groups(self) -> list[ET.Element]:
        """Return every ThreadGroup of the document in document order."""
        return list(self.root.iter(THREAD_GROUP))

    def csv_data_sets(self) -> list[ET.Element]:
        """Return every CSVDataSet of the document in document order."""
        return list(self.root.iter(CSV_DATA_SET))

    def describe(self) -> list[dict[str, Any]]:
        """Summarize each Thread Group as the converter will see it.

        Counts are collected with the same traversal rules the converter
        uses: only samplers and transaction controllers reached through
        paired hashTrees are counted, and extractors only when they sit
        directly under a sampler.

        Returns:
            List of dictionaries with keys: name, has_children, samplers,
            transactions, regex_extractors, json_extractors
        """
        summary = []
        for index, group in enumerate(self.thread_groups(), 1):
            counts = {
                "samplers": 0,
                "transactions": 0,
                "regex_extractors": 0,
                "json_extractors": 0,
            }
            container = self.children_of(group)
            self._count(container, counts)
            summary.append(
                {
                    "name": get_test_name(group) or f"ThreadGroup_{index}",
                    "has_children": container is not None,
                    **counts,
                }
            )
        return summary

    def _count(self, container: Optional[ET.Element], counts: dict[str, int]) -> None:
        for element in self.iter_children(container):
            if element.tag == HTTP_SAMPLER:
                counts["samplers"] += 1
                for extractor in self.iter_children(self.children_of(element)):
                    if extractor.tag == REGEX_EXTRACTOR:
                        counts["regex_extractors"] += 1
                    elif extractor.tag == JSON_POST_PROCESSOR:
                        counts["json_extractors"] += 1
            elif element.tag == TRANSACTION_CONTROLLER:
                counts["transactions"] += 1
                self._count(self.children_of(element), counts)
