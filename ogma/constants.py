"""Shared constant values for the Ogma runtime."""

KEYWORDS = ["Given", "When", "Then"]
CONTINUATION_KEYWORD = "And"

VARIABLE_MARKER = "`"
QUERY_PREFIX = "q"
DATA_PREFIX = "d"

PUNCTUATION = ",;"

QUERY_ARTICLE = "the"
QUERY_JOINER = "of"
ORDINAL_SUFFIXES = {"1": "st", "2": "nd", "3": "rd"}

DATA_TRUE = "true"
DATA_FALSE = "false"
DATA_NOTHING = "nothing"
DATA_EMPTY_LIST = ("the", "empty", "list")
DATA_LIST_HEAD = ("the", "list", "containing")
DATA_LIST_LAST = "and"

COMPILE_LOGGER = "ogma.compile"
VM_LOGGER = "ogma.vm"
BINDING_LOGGER = "ogma.binding"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_STEPS_MODULE = "ogma.steps.arithmetic"
REPL_HISTORY_LIMIT = 10

KEYWORD_COLORS = {
    "Given": "#8BC34A",
    "When": "#FFEB3B",
    "Then": "#FF7043",
    None: "#B0BEC5",
}

__all__ = [
    "KEYWORDS",
    "CONTINUATION_KEYWORD",
    "VARIABLE_MARKER",
    "QUERY_PREFIX",
    "DATA_PREFIX",
    "PUNCTUATION",
    "QUERY_ARTICLE",
    "QUERY_JOINER",
    "ORDINAL_SUFFIXES",
    "DATA_TRUE",
    "DATA_FALSE",
    "DATA_NOTHING",
    "DATA_EMPTY_LIST",
    "DATA_LIST_HEAD",
    "DATA_LIST_LAST",
    "COMPILE_LOGGER",
    "VM_LOGGER",
    "BINDING_LOGGER",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_STEPS_MODULE",
    "REPL_HISTORY_LIMIT",
    "KEYWORD_COLORS",
]
