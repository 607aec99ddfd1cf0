"""Names the engine and the test framework call implicitly."""

# Godot engine callbacks / virtual methods, always considered used
ENGINE_CALLBACKS = frozenset(
    {
        "_init",
        "_ready",
        "_enter_tree",
        "_exit_tree",
        "_process",
        "_physics_process",
        "_input",
        "_gui_input",
        "_unhandled_input",
        "_unhandled_key_input",
        "_draw",
        "_notification",
        "_get",
        "_set",
        "_get_property_list",
        "_validate_property",
        "_to_string",
    }
)

# GUT (Godot Unit Test) lifecycle hooks
TEST_HOOKS = frozenset(
    {
        "before_each",
        "after_each",
        "before_all",
        "after_all",
        "before_test",
        "after_test",
    }
)

TEST_FUNCTION_PREFIX = "test_"

# Identifiers that look like calls or values but never name a user function
KEYWORDS = frozenset(
    {
        "if",
        "elif",
        "else",
        "for",
        "while",
        "match",
        "when",
        "return",
        "pass",
        "break",
        "continue",
        "and",
        "or",
        "not",
        "in",
        "is",
        "as",
        "await",
        "func",
        "class",
        "static",
        "const",
        "var",
        "signal",
        "extends",
        "super",
        "true",
        "false",
        "null",
        "self",
        "print",
        "assert",
        "preload",
    }
)

TEST_DIR_NAMES = frozenset({"tests", "test"})
TEST_STEM_PREFIX = "test_"
TEST_STEM_SUFFIX = "_test"

SOURCE_EXTENSION = ".gd"
SCENE_EXTENSION = ".tscn"
DEFAULT_EXCLUDE_DIRS = ("addons",)

IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"


def is_engine_callback(name: str) -> bool:
    return name in ENGINE_CALLBACKS


def is_test_function(name: str) -> bool:
    """True for GUT test methods (`test_*`, any case) and GUT lifecycle hooks."""
    return name.lower().startswith(TEST_FUNCTION_PREFIX) or name in TEST_HOOKS
