"""Tollgate constants

Closed enumerations for condition operators, interpolation filters and
requirement types, plus the git ref prefixes used by hook filters.
"""

from enum import Enum

# Git ref prefixes stripped before branch/tag filters are matched.
GIT_REF_BRANCH_PREFIX = "refs/heads/"
GIT_REF_TAG_PREFIX = "refs/tags/"

# Name of the per-project directory holding rule overrides.
PROJECT_DIR = ".tollgate"
RULES_FILE = "tollgate.yaml"


class Operator(str, Enum):
    """Condition operators."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    REGEX = "regex"


class Filter(str, Enum):
    """Value filters usable in a placeholder pipeline."""

    UPPER = "upper"
    LOWER = "lower"
    TITLE = "title"
    UNTITLE = "untitle"
    TRIM = "trim"
    NOSPACE = "nospace"
    SWAPCASE = "swapcase"
    ESCAPE = "escape"
    QUOTE = "quote"
    SQUOTE = "squote"
    STRING_QUOTE = "stringQuote"
    B64ENC = "b64enc"
    B64DEC = "b64dec"
    URLENCODE = "urlencode"
    DIRNAME = "dirname"
    BASENAME = "basename"
    # Filters taking arguments; the piped value is passed last
    DEFAULT = "default"
    TRUNC = "trunc"
    SUBSTR = "substr"
    ABBREV = "abbrev"
    REPLACE = "replace"
    TRIM_PREFIX = "trimPrefix"
    TRIM_SUFFIX = "trimSuffix"
    TRIM_ALL = "trimAll"
    REPEAT = "repeat"
    INDENT = "indent"
    NINDENT = "nindent"
    TERNARY = "ternary"


class RequirementType(str, Enum):
    """Requirement types a job can declare."""

    BINARY = "binary"
    NETWORK = "network"
    MODEL = "model"
    HOSTNAME = "hostname"
    PLUGIN = "plugin"
    SERVICE = "service"
    MEMORY = "memory"
    VOLUME = "volume"
    OS_ARCH = "os-architecture"
    REGION = "region"
    SECRET = "secret"


# Requirement types allowed at most once per requirement list.
SINGLETON_REQUIREMENT_TYPES = (
    RequirementType.MODEL,
    RequirementType.HOSTNAME,
    RequirementType.OS_ARCH,
)


class When:
    """Shorthand trigger conditions and the plain conditions they expand to."""

    SUCCESS = "success"
    MANUAL = "manual"

    ALL = [SUCCESS, MANUAL]

    # shorthand -> (variable, operator, value)
    EXPANSIONS = {
        SUCCESS: ("cds.status", Operator.EQ, "Success"),
        MANUAL: ("cds.manual", Operator.EQ, "true"),
    }
