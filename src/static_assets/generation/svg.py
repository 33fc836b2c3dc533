"""SVG minification.

Removes comments, editor metadata and insignificant whitespace from SVG
documents and rounds long decimal numbers, using ElementTree.
"""

import re
import xml.etree.ElementTree as ET

from ..config import SvgOptions

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

# Editor namespaces whose elements and attributes carry no rendering data
EDITOR_NAMESPACES = (
    "http://www.inkscape.org/namespaces/inkscape",
    "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "http://ns.adobe.com/AdobeIllustrator/10.0/",
    "http://www.bohemiancoding.com/sketch/ns",
    "http://www.figma.com/figma/ns",
)

METADATA_TAGS = {f"{{{SVG_NS}}}metadata", f"{{{SVG_NS}}}title", f"{{{SVG_NS}}}desc"}

# Attributes whose numbers may be rounded
NUMERIC_ATTRIBUTES = {
    "d", "points", "transform", "viewBox", "x", "y", "x1", "y1", "x2", "y2",
    "cx", "cy", "r", "rx", "ry", "width", "height", "stroke-width", "offset",
}

NUMBER_PATTERN = re.compile(r"-?\d*\.\d+(?:[eE][-+]?\d+)?")

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)


def _namespace(name: str) -> str | None:
    if name.startswith("{"):
        return name[1:].split("}", 1)[0]
    return None


def _round_numbers(value: str, precision: int) -> str:
    def shorten(match: re.Match[str]) -> str:
        number = float(match.group(0))
        text = f"{round(number, precision):.{precision}f}".rstrip("0").rstrip(".")
        if text in ("-0", ""):
            text = "0"
        return text

    return NUMBER_PATTERN.sub(shorten, value)


def _clean(element: ET.Element, options: SvgOptions) -> None:
    for child in list(element):
        if not isinstance(child.tag, str):
            # Comment nodes are only present when comments are kept
            if options.remove_comments:
                element.remove(child)
            continue
        if options.remove_metadata and (
            child.tag in METADATA_TAGS or _namespace(child.tag) in EDITOR_NAMESPACES
        ):
            element.remove(child)
            continue
        _clean(child, options)

    if options.remove_metadata:
        for name in [n for n in element.attrib if _namespace(n) in EDITOR_NAMESPACES]:
            del element.attrib[name]

    if options.float_precision is not None:
        for name, value in element.attrib.items():
            if name in NUMERIC_ATTRIBUTES:
                element.attrib[name] = _round_numbers(value, options.float_precision)

    if options.collapse_whitespace:
        if element.text is not None and not element.text.strip():
            element.text = None
        if element.tail is not None and not element.tail.strip():
            element.tail = None


def minify_svg(xml: str, options: SvgOptions | None = None) -> str:
    """Return a minified copy of an SVG document.

    Args:
        xml: SVG source text
        options: Minification settings (defaults apply when omitted)

    Returns:
        Minified SVG markup

    Raises:
        ET.ParseError: If the document is not well-formed XML
    """
    options = options or SvgOptions()
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=not options.remove_comments))
    root = ET.fromstring(xml, parser=parser)
    _clean(root, options)
    return ET.tostring(root, encoding="unicode")
