from enum import Enum


class OutputFormat(str, Enum):
    TREE = "tree"
    JSON = "json"
    CSV = "csv"


class Category(str, Enum):
    UNUSED = "unused"
    TEST_ONLY = "test_only"
