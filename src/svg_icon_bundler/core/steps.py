"""Named text-level rewrite steps used by the SVG optimizer.

Each step is a pure function ``(markup, config) -> markup`` built from
regular-expression substitutions. Steps never parse the document and never
raise: malformed input simply passes through less optimized.

The canonical order lives in ``constants.OPTIMIZER_STEPS``. Later steps rely
on earlier ones, e.g. ``remove_default_attrs`` expects attribute ``=`` signs
without surrounding whitespace.
"""

import re
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Context, Decimal

from svg_icon_bundler.constants import COLOR_PROPERTIES, EDITOR_NAMESPACE_PREFIXES
from svg_icon_bundler.models.config import OptimizerConfig

RewriteStep = Callable[[str, OptimizerConfig], str]

# XML whitespace only, so text such as non-breaking spaces survives
_WS = r"[ \t\r\n]"
_ATTR_VALUE = r"(?:\"[^\"]*\"|'[^']*')"
_EQ = rf"{_WS}*={_WS}*"

# strip_prolog
_XML_DECLARATION = re.compile(r"<\?xml[^>]*\?>", re.IGNORECASE)
_DOCTYPE = re.compile(r"<!DOCTYPE[^>\[]*(?:\[[\s\S]*?\])?[^>]*>", re.IGNORECASE)
_COMMENT = re.compile(r"<!--[\s\S]*?-->")
_DROPPED_ELEMENTS = re.compile(
    r"<(metadata|title|desc)\b[^>]*?(?:/>|>[\s\S]*?</\1" + _WS + r"*>)", re.IGNORECASE
)

# strip_editor_data
_EDITOR_PREFIXES = "|".join(EDITOR_NAMESPACE_PREFIXES)
_EDITOR_ELEMENT = re.compile(
    rf"<({_EDITOR_PREFIXES}):([\w.-]+)\b[^>]*?(?:/>|>[\s\S]*?</\1:\2{_WS}*>)"
)
_EDITOR_ATTR = re.compile(rf"{_WS}+(?:{_EDITOR_PREFIXES}):[\w.-]+{_EQ}{_ATTR_VALUE}")
_XML_SPACE_ATTR = re.compile(rf"{_WS}+xml:space{_EQ}{_ATTR_VALUE}")
_DATA_ATTR = re.compile(rf"{_WS}+data-[\w.:-]+{_EQ}{_ATTR_VALUE}")
_ID_ATTR = re.compile(rf"{_WS}+id{_EQ}{_ATTR_VALUE}")
_XMLNS_PREFIXED = re.compile(rf"{_WS}+xmlns:([\w.-]+){_EQ}{_ATTR_VALUE}")

# round_numbers
_DECIMAL = re.compile(r"(\d*)\.(\d+)")

# collapse_whitespace
_WS_RUN = re.compile(rf"{_WS}+")
_BETWEEN_TAGS = re.compile(rf">{_WS}+<")
_AROUND_EQUALS = re.compile(rf"{_WS}*={_WS}*(?=[\"'])")
_BEFORE_TAG_END = re.compile(rf"{_WS}+(/?>)")
_TAG = re.compile(r"<[^<>]*>")

# normalize_colors
_COLOR_PROPS = "|".join(re.escape(prop) for prop in COLOR_PROPERTIES)
_COLOR_CONTEXT = re.compile(
    rf"(?<![\w-])({_COLOR_PROPS})({_EQ}[\"']|{_WS}*:{_WS}*)([^\"';<>]*)", re.IGNORECASE
)
_CHANNEL = r"\s*(\d+(?:\.\d+)?%?)\s*"
_RGB = re.compile(rf"rgb\({_CHANNEL},{_CHANNEL},{_CHANNEL}\)", re.IGNORECASE)
_HEX_COLOR = re.compile(r"(?<!url\()#([0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![0-9a-fA-F])")

# remove_default_attrs
_DEFAULT_ATTRS = re.compile(
    rf"{_WS}+(?:(?:fill-opacity|stroke-opacity|opacity){_EQ}([\"'])1(?:\.0*)?\1"
    rf"|fill-rule{_EQ}([\"'])nonzero\2)"
)

# remove_noop_transforms
_ZERO = r"[-+]?(?:0+(?:\.0*)?|\.0+)"
_ONE = r"\+?0*1(?:\.0*)?"
_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_SEP = rf"(?:{_WS}*,{_WS}*|{_WS}+)"
_IDENTITY = (
    rf"(?:translate\({_WS}*{_ZERO}(?:{_SEP}{_ZERO})?{_WS}*\)"
    rf"|scale\({_WS}*{_ONE}(?:{_SEP}{_ONE})?{_WS}*\)"
    rf"|rotate\({_WS}*{_ZERO}(?:{_SEP}{_NUMBER}{_SEP}{_NUMBER})?{_WS}*\)"
    rf"|skew[XY]\({_WS}*{_ZERO}{_WS}*\)"
    rf"|matrix\({_WS}*{_ONE}{_SEP}{_ZERO}{_SEP}{_ZERO}"
    rf"{_SEP}{_ONE}{_SEP}{_ZERO}{_SEP}{_ZERO}{_WS}*\))"
)
_NOOP_TRANSFORM = re.compile(
    rf"{_WS}+(?:transform|gradientTransform|patternTransform){_EQ}([\"']){_WS}*"
    rf"{_IDENTITY}(?:{_SEP}?{_IDENTITY})*{_WS}*\1"
)

# remove_empty_groups
_EMPTY_GROUP = re.compile(rf"<g((?:{_WS}[^>]*?)?)(?:/>|>{_WS}*</g{_WS}*>)")
_HAS_ID = re.compile(rf"(?:^|{_WS})id{_EQ}")

# remove_viewbox
_ROOT_SVG_TAG = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_VIEWBOX_ATTR = re.compile(rf"{_WS}+viewBox{_EQ}([\"'])([^\"']*)\1")
_UNITLESS = r"(\d+(?:\.\d+)?)(?:px)?"
_WIDTH_ATTR = re.compile(rf"{_WS}width{_EQ}[\"']{_UNITLESS}[\"']")
_HEIGHT_ATTR = re.compile(rf"{_WS}height{_EQ}[\"']{_UNITLESS}[\"']")


def remove_xml_declaration(markup: str) -> str:
    """Remove the ``<?xml ...?>`` declaration so the text can be parsed as str."""
    return _XML_DECLARATION.sub("", markup)


def strip_prolog(markup: str, config: OptimizerConfig) -> str:
    """Remove the XML declaration, DOCTYPE, comments and descriptive elements.

    ``<metadata>``, ``<title>`` and ``<desc>`` are dropped together with their
    content.
    """
    markup = remove_xml_declaration(markup)
    markup = _DOCTYPE.sub("", markup)
    markup = _COMMENT.sub("", markup)
    return _DROPPED_ELEMENTS.sub("", markup)


def _drop_unused_namespaces(markup: str) -> str:
    """Remove ``xmlns:prefix`` declarations whose prefix is never used."""
    body = _XMLNS_PREFIXED.sub("", markup)

    def replace(match: re.Match[str]) -> str:
        prefix = re.escape(match.group(1))
        if re.search(rf"[<\s/]{prefix}:", body):
            return match.group(0)
        return ""

    return _XMLNS_PREFIXED.sub(replace, markup)


def strip_editor_data(markup: str, config: OptimizerConfig) -> str:
    """Remove editor namespaces, vendor attributes and, optionally, ids."""
    markup = _EDITOR_ELEMENT.sub("", markup)
    markup = _EDITOR_ATTR.sub("", markup)
    markup = _XML_SPACE_ATTR.sub("", markup)
    markup = _DATA_ATTR.sub("", markup)
    if config.strip_ids:
        markup = _ID_ATTR.sub("", markup)
    return _drop_unused_namespaces(markup)


def round_numbers(markup: str, config: OptimizerConfig) -> str:
    """Round decimal literals with more than ``config.precision`` fractional digits.

    Rounding is half-up on the decimal text, so the result never depends on
    binary floating point and never uses scientific notation. A literal
    written without an integer part keeps that form (``.12345`` -> ``.12``),
    which keeps adjacent path numbers such as ``.5.25`` separated. When such a
    literal carries into an integer part, a space keeps it apart from a
    preceding number (``1.5.9999`` -> ``1.5 1.00``).
    """
    precision = config.precision
    quantum = Decimal(1).scaleb(-precision)

    def replace(match: re.Match[str]) -> str:
        integer, fraction = match.groups()
        if len(fraction) <= precision:
            return match.group(0)
        # Enough digits that quantize never overflows the context
        context = Context(prec=len(integer) + precision + 2)
        literal = Decimal(f"{integer or '0'}.{fraction}")
        rounded = literal.quantize(quantum, rounding=ROUND_HALF_UP, context=context)
        text = f"{rounded:f}"
        if not integer:
            if text.startswith("0."):
                return text[1:]
            before = markup[match.start() - 1 : match.start()]
            if before.isdigit() or before == ".":
                return " " + text
        return text

    return _DECIMAL.sub(replace, markup)


def _tighten_tag(match: re.Match[str]) -> str:
    tag = _AROUND_EQUALS.sub("=", match.group(0))
    return _BEFORE_TAG_END.sub(r"\1", tag)


def collapse_whitespace(markup: str, config: OptimizerConfig) -> str:
    """Collapse whitespace runs and drop whitespace between tags.

    Whitespace inside attribute values is reduced to a single space but never
    removed, so numeric tokens in path data cannot merge.
    """
    markup = _WS_RUN.sub(" ", markup)
    markup = _BETWEEN_TAGS.sub("><", markup)
    markup = _TAG.sub(_tighten_tag, markup)
    return markup.strip()


def _channel_to_int(value: str) -> int:
    if value.endswith("%"):
        number = float(value[:-1]) * 255 / 100
    else:
        number = float(value)
    return int(max(0.0, min(255.0, number)) + 0.5)


def _rgb_to_hex(match: re.Match[str]) -> str:
    return "#" + "".join(f"{_channel_to_int(channel):02x}" for channel in match.groups())


def _shorten_hex(match: re.Match[str]) -> str:
    digits = match.group(1).lower()
    if len(digits) == 6 and digits[0::2] == digits[1::2]:
        digits = digits[0] + digits[2] + digits[4]
    return f"#{digits}"


def normalize_colors(markup: str, config: OptimizerConfig) -> str:
    """Rewrite colors in color-bearing attributes and style properties.

    ``rgb(r,g,b)`` becomes lower-case ``#rrggbb``; ``#rrggbb`` with paired
    digits collapses to ``#rgb``. ``url(#id)`` references are left alone.
    """

    def replace(match: re.Match[str]) -> str:
        value = _RGB.sub(_rgb_to_hex, match.group(3))
        value = _HEX_COLOR.sub(_shorten_hex, value)
        return f"{match.group(1)}{match.group(2)}{value}"

    return _COLOR_CONTEXT.sub(replace, markup)


def remove_default_attrs(markup: str, config: OptimizerConfig) -> str:
    """Remove presentation attributes that restate the SVG default."""
    return _DEFAULT_ATTRS.sub("", markup)


def remove_noop_transforms(markup: str, config: OptimizerConfig) -> str:
    """Remove transform attributes made only of identity transforms."""
    return _NOOP_TRANSFORM.sub("", markup)


def remove_empty_groups(markup: str, config: OptimizerConfig) -> str:
    """Remove childless ``<g>`` elements until none are left.

    Groups carrying an ``id`` are kept since they may be referenced.
    """

    def replace(match: re.Match[str]) -> str:
        if _HAS_ID.search(match.group(1)):
            return match.group(0)
        return ""

    while True:
        reduced = _EMPTY_GROUP.sub(replace, markup)
        if reduced == markup:
            return markup
        markup = reduced


def remove_viewbox(markup: str, config: OptimizerConfig) -> str:
    """Drop a root ``viewBox="0 0 W H"`` that only repeats ``width``/``height``."""
    root = _ROOT_SVG_TAG.search(markup)
    if root is None:
        return markup

    tag = root.group(0)
    viewbox = _VIEWBOX_ATTR.search(tag)
    width = _WIDTH_ATTR.search(tag)
    height = _HEIGHT_ATTR.search(tag)
    if viewbox is None or width is None or height is None:
        return markup

    parts = re.split(r"[\s,]+", viewbox.group(2).strip())
    if len(parts) != 4:
        return markup
    try:
        numbers = [Decimal(part) for part in parts]
        size = [Decimal(width.group(1)), Decimal(height.group(1))]
    except ArithmeticError:
        return markup
    if numbers[0] != 0 or numbers[1] != 0 or numbers[2:] != size:
        return markup

    new_tag = tag[: viewbox.start()] + tag[viewbox.end() :]
    return markup[: root.start()] + new_tag + markup[root.end() :]


STEP_FUNCTIONS: dict[str, RewriteStep] = {
    "strip_prolog": strip_prolog,
    "strip_editor_data": strip_editor_data,
    "round_numbers": round_numbers,
    "collapse_whitespace": collapse_whitespace,
    "normalize_colors": normalize_colors,
    "remove_default_attrs": remove_default_attrs,
    "remove_noop_transforms": remove_noop_transforms,
    "remove_empty_groups": remove_empty_groups,
    "remove_viewbox": remove_viewbox,
}
