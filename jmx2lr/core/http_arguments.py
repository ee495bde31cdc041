"""HTTP sampler argument extraction.

Reads the request definition stored on an HTTPSamplerProxy element:
method, base URL parts, the Arguments collection and the raw body flag.
"""

import xml.etree.ElementTree as ET

from jmx2lr.core.data_structures import HttpArgument, RequestSpec
from jmx2lr.core.jmx_loader import get_bool_prop, get_string_prop
from jmx2lr.core.text_transform import convert_jmeter_vars

DEFAULT_METHOD = "GET"
DEFAULT_PROTOCOL = "http"
DEFAULT_DOMAIN = "localhost"


def extract_http_arguments(sampler: ET.Element) -> list[HttpArgument]:
    """Extract sampler arguments in document order.

    The arguments live in:
        elementProp[name=HTTPsampler.Arguments, elementType=Arguments]
          collectionProp[name=Arguments.arguments]
            elementProp[elementType=HTTPArgument]

    Repeated names are kept, as in a form-encoded body.

    Args:
        sampler: HTTPSamplerProxy element

    Returns:
        List of HttpArgument
    """
    result: list[HttpArgument] = []

    for element_prop in sampler.findall("elementProp"):
        if element_prop.get("name") != "HTTPsampler.Arguments":
            continue
        if element_prop.get("elementType") != "Arguments":
            continue

        for collection in element_prop.findall("collectionProp"):
            if collection.get("name") != "Arguments.arguments":
                continue

            for arg in collection.findall("elementProp"):
                if arg.get("elementType") != "HTTPArgument":
                    continue
                name = get_string_prop(arg, "Argument.name")
                value = get_string_prop(arg, "Argument.value")
                if name is None and value is None:
                    continue
                result.append(HttpArgument(name=name or "", value=value or ""))

    return result


def is_post_body_raw(sampler: ET.Element) -> bool:
    """Whether the sampler sends its first argument as the raw body."""
    return get_bool_prop(sampler, "HTTPSampler.postBodyRaw")


def build_base_url(sampler: ET.Element) -> str:
    """Build protocol://domain[:port][/path] from sampler properties.

    Missing protocol defaults to http and missing domain to localhost.
    """
    protocol = get_string_prop(sampler, "HTTPSampler.protocol")
    domain = get_string_prop(sampler, "HTTPSampler.domain")
    port = get_string_prop(sampler, "HTTPSampler.port")
    path = get_string_prop(sampler, "HTTPSampler.path")

    if not protocol or not protocol.strip():
        protocol = DEFAULT_PROTOCOL
    if not domain or not domain.strip():
        domain = DEFAULT_DOMAIN

    url = f"{protocol}://{domain}"
    if port and port.strip():
        url += f":{port}"
    if path and path.strip():
        if not path.startswith("/"):
            url += "/"
        url += path
    return url


def append_query_string(base_url: str, arguments: list[HttpArgument]) -> str:
    """Append arguments to base_url as a query string.

    Example:
        >>> append_query_string("http://host/path", [HttpArgument("id", "${uid}")])
        'http://host/path?id={uid}'
    """
    if not arguments:
        return base_url

    url = base_url
    if "?" not in base_url:
        url += "?"
    elif not base_url.endswith(("&", "?")):
        url += "&"

    pairs = [
        f"{convert_jmeter_vars(arg.name)}={convert_jmeter_vars(arg.value)}"
        for arg in arguments
    ]
    return url + "&".join(pairs)


def build_request_spec(sampler: ET.Element, name: str) -> RequestSpec:
    """Read the full request definition of a sampler.

    Args:
        sampler: HTTPSamplerProxy element
        name: Resolved display name of the sampler

    Returns:
        RequestSpec for code generation
    """
    method = get_string_prop(sampler, "HTTPSampler.method")
    if not method or not method.strip():
        method = DEFAULT_METHOD

    return RequestSpec(
        name=name,
        method=method.strip(),
        base_url=build_base_url(sampler),
        arguments=extract_http_arguments(sampler),
        post_body_raw=is_post_body_raw(sampler),
    )
