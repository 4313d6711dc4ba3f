"""Application-wide constants for the SVG icon bundler.

This module centralizes the constants used throughout the application to
ensure consistency between the optimizer, the encoder and the builders.

Constants are grouped into the following categories:
- Path Constants: default input/output locations and config file names
- Optimizer Constants: precision defaults and pass limits
- Data URI Constants: prefix and escaping allow-list
- Bundle Constants: batch size and generated JavaScript names
- Sprite Constants: symbol id prefix and SVG namespace
- Unit Conversion Constants: byte sizes used in reports
"""

# Path constants
APP_DIR_NAME = "svg-icon-bundler"  # Directory name for user configuration
CONFIG_FILENAME = "svg-icon-bundler.yaml"  # Config file searched in cwd/user dir
DEFAULT_BUNDLE_INPUT_DIR = "./sprite"  # Source directory for bundle mode
DEFAULT_BUNDLE_OUTPUT_FILE = "./emojiData.js"  # Generated JavaScript module
DEFAULT_SPRITE_INPUT_DIR = "./emojis"  # Source directory for sprite mode
DEFAULT_SPRITE_OUTPUT_FILE = "./emoji-sprite.svg"  # Generated sprite document
DEFAULT_TREE_OUTPUT_DIR_NAME = "optimized-icons"  # Sibling dir for optimize mode

# File type/extension constants
SVG_EXTENSION = ".svg"  # Icon file extension (matched case-insensitively)
LOOKUP_STRIP_EXTENSIONS = (".svg", ".png")  # Extensions dropped by key lookups

# Optimizer constants
DEFAULT_PRECISION = 2  # Fractional digits kept for decimal literals
MIN_PRECISION = 1  # At least one digit keeps ".5.25"-style path numbers apart
MAX_PRECISION = 10  # Upper bound accepted by configuration
MAX_OPTIMIZER_PASSES = 10  # Upper bound for multipass optimization
# Canonical order of the optimizer rewrite steps
OPTIMIZER_STEPS = (
    "strip_prolog",
    "strip_editor_data",
    "round_numbers",
    "collapse_whitespace",
    "normalize_colors",
    "remove_default_attrs",
    "remove_noop_transforms",
    "remove_empty_groups",
    "remove_viewbox",
)
# Steps enabled unless configured otherwise (remove_viewbox follows preserve_viewbox)
DEFAULT_OPTIMIZER_STEPS = OPTIMIZER_STEPS[:-1]
EDITOR_NAMESPACE_PREFIXES = ("inkscape", "sodipodi", "sketch", "serif")
COLOR_PROPERTIES = ("fill", "stroke", "stop-color", "flood-color", "lighting-color", "color")

# Data URI constants
DATA_URI_PREFIX = "data:image/svg+xml;charset=utf-8,"
# Characters left unescaped besides ASCII letters and digits
DATA_URI_SAFE_CHARS = "-_.!~*()/:;,="

# Bundle constants
DEFAULT_BATCH_SIZE = 200  # Files processed between progress reports
DEFAULT_GLOBAL_NAME = "EMOJI_DATA"  # Global holding the generated mapping
DEFAULT_HELPER_NAME = "getEmojiDataUrl"  # Global lookup helper function
BUNDLE_TEMPLATE_NAME = "bundle.js.j2"  # Packaged jinja2 template
BUNDLE_FORMATS = ("js", "json")  # Supported bundle serializations
BASE64_OVERHEAD_FACTOR = 1.33  # Size ratio of base64 output to its input

# Sprite constants
DEFAULT_SYMBOL_PREFIX = "e_"  # Prefix for every <symbol> id
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
SPRITE_HIDDEN_STYLE = "display:none;"

# Unit conversion constants
BYTES_PER_KILOBYTE = 1024  # Bytes in a kilobyte
BYTES_PER_MEGABYTE = 1024 * 1024  # Bytes in a megabyte
PERCENT_MAX = 100.0  # Maximum percentage value

# CLI exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
