from pathlib import Path

from gdcf.core.analyzer import (
    DefaultTestPathPredicate,
    DirectoryTestPathPredicate,
    ReachabilityAnalyzer,
    find_only_test_referenced_functions,
    find_unused_functions,
)
from gdcf.core.models import FunctionDefinition, ScanResult


class FilenamePrefixPredicate:
    """Only files whose name starts with `test_` are test code."""

    def is_test_path(self, path: Path) -> bool:
        return path.name.startswith("test_")


def unused_names(root: Path, **kwargs) -> list[str]:
    return [fd.name for fd in find_unused_functions(root, **kwargs)]


def only_test_names(root: Path, **kwargs) -> list[str]:
    return [fd.name for fd in find_only_test_referenced_functions(root, **kwargs)]


def test_unused_bootstrap(project):
    root = project(
        {
            "main.gd": """extends Node

func _ready():
    used_helper()

func used_helper():
    print("used")

func never_called():
    print("nobody calls me")
"""
        }
    )
    assert unused_names(root) == ["never_called"]


def test_empty_project(project):
    root = project({"main.gd": "extends Node\nfunc _ready():\n    pass\n"})
    assert find_unused_functions(root) == []


def test_ignore_tag_excludes_from_unused(project):
    root = project(
        {
            "main.gd": """extends Node

func _ready():
    pass

func will_wire_later(): # gdcf-ignore
    pass

func actually_unused():
    pass
"""
        }
    )
    assert unused_names(root) == ["actually_unused"]


def test_ignored_definition_with_references_is_not_test_only(project):
    root = project(
        {
            "src/main.gd": "func kept(): # gdcf-ignore\n\tpass\n",
            "tests/test_main.gd": "func test_kept():\n\tkept()\n",
        }
    )
    assert only_test_names(root) == []


def test_self_recursive_function_is_used(project):
    root = project(
        {
            "main.gd": """extends Node
func _ready():
    pass

func used_elsewhere():
    pass

func only_self_ref():
    only_self_ref()
""",
            "other.gd": "extends Node\nfunc _ready():\n    used_elsewhere()\n",
        }
    )
    assert unused_names(root) == []


def test_engine_callbacks_and_test_hooks_never_unused(project):
    root = project(
        {
            "main.gd": (
                "func _process(delta):\n\tpass\n"
                "func _notification(what):\n\tpass\n"
                "func before_each():\n\tpass\n"
                "func Test_Something():\n\tpass\n"
            )
        }
    )
    assert unused_names(root) == []


def test_tween_method_callback_not_unused(project):
    root = project(
        {
            "audio.gd": """extends Node
const TWEEN_FADE_AUDIO_DURATION = 0.5

func set_master_volume(volume_db: float) -> void:
    master_volume = volume_db
    master_volume_changed.emit(master_volume)

func transition_master_volume(from_volume: float, to_volume: float) -> void:
    if _fade_tween != null:
        _fade_tween.kill()
    _fade_tween = create_tween()
    _fade_tween.tween_method(set_master_volume, from_volume, to_volume, TWEEN_FADE_AUDIO_DURATION)
"""
        }
    )
    names = unused_names(root)
    assert "set_master_volume" not in names
    assert "transition_master_volume" in names


def test_higher_order_bare_identifier_argument(project):
    root = project(
        {
            "main.gd": (
                "func _ready():\n\tsome_call(callback_name, 1, 2)\n"
                "func callback_name(a, b):\n\tpass\n"
            )
        }
    )
    assert unused_names(root) == []


def test_signal_connected_in_scene(project):
    root = project(
        {
            "ui.gd": "extends Control\nfunc _on_quit_pressed():\n\tget_tree().quit()\n",
            "ui.tscn": (
                '[connection signal="pressed" from="Quit" to="." method="_on_quit_pressed"]\n'
            ),
        }
    )
    assert unused_names(root) == []


def test_method_call_inside_string_is_not_a_reference(project):
    root = project(
        {
            "main.gd": (
                "func _ready():\n\tprint(\"obj.ghost() is not a call\")\n"
                "func ghost():\n\tpass\n"
            )
        }
    )
    assert unused_names(root) == ["ghost"]


def test_exclude_dirs(project):
    root = project(
        {
            "main.gd": "extends Node\nfunc _ready():\n    pass\nfunc unused_in_main():\n    pass\n",
            "addons/plugin.gd": (
                "extends Node\nfunc _ready():\n    pass\nfunc unused_in_plugin():\n    pass\n"
            ),
        }
    )
    assert unused_names(root, exclude_dirs=["addons"]) == ["unused_in_main"]


def test_reference_on_other_declaration_line_of_same_name_is_ignored(project):
    root = project({"a.gd": "func dup():\n\tpass\n", "b.gd": "func dup():\n\tpass\n"})
    assert unused_names(root) == ["dup", "dup"]


def test_only_test_referenced(project):
    root = project(
        {
            "src/main.gd": """extends Node
func _ready():
    pass

func only_called_from_test():
    pass
""",
            "tests/test_main.gd": """extends Node
func test_thing():
    only_called_from_test()
""",
        }
    )
    assert only_test_names(root) == ["only_called_from_test"]
    assert unused_names(root) == []


def test_referenced_from_app_and_tests_is_not_test_only(project):
    root = project(
        {
            "src/main.gd": "func _ready():\n\tshared()\nfunc shared():\n\tpass\n",
            "tests/test_main.gd": "func test_shared():\n\tshared()\n",
        }
    )
    assert only_test_names(root) == []


def test_only_test_referenced_with_custom_predicate(project):
    root = project(
        {
            "main.gd": "extends Node\nfunc _ready():\n    pass\n\nfunc helper():\n    pass\n",
            "test_foo.gd": "extends Node\nfunc _run():\n    helper()\n",
        }
    )
    assert only_test_names(root, is_test_path=FilenamePrefixPredicate()) == ["helper"]


def test_directory_predicate(project):
    root = project({"spec/a_spec.gd": "", "src/main.gd": "", "tests/x.gd": ""})
    predicate = DirectoryTestPathPredicate(root, ["spec"])
    assert predicate.is_test_path(root / "spec" / "a_spec.gd")
    assert not predicate.is_test_path(root / "src" / "main.gd")
    assert not predicate.is_test_path(root / "tests" / "x.gd")


def test_default_is_test_path(project):
    root = project({"tests/foo.gd": "", "src/main.gd": "", "game/logic_test.gd": ""})
    predicate = DefaultTestPathPredicate(root)
    assert predicate.is_test_path(root / "tests" / "foo.gd")
    assert not predicate.is_test_path(root / "src" / "main.gd")
    assert predicate.is_test_path(root / "game" / "logic_test.gd")


def test_default_is_test_path_outside_root(tmp_path):
    inside = tmp_path / "project"
    outside = tmp_path / "other" / "tests" / "foo.gd"
    outside.parent.mkdir(parents=True)
    outside.write_text("")
    inside.mkdir()
    assert not DefaultTestPathPredicate(inside).is_test_path(outside)


def test_default_is_test_path_stem_affixes(project):
    root = project({"test_something.gd": "", "something_test.gd": "", "contest.gd": ""})
    predicate = DefaultTestPathPredicate(root)
    assert predicate.is_test_path(root / "test_something.gd")
    assert predicate.is_test_path(root / "something_test.gd")
    assert not predicate.is_test_path(root / "contest.gd")


def test_default_is_test_path_case_insensitive(project):
    root = project(
        {
            "Tests/foo.gd": "",
            "TEST/bar.gd": "",
            "Test_Something.gd": "",
            "something_Test.gd": "",
        }
    )
    predicate = DefaultTestPathPredicate(root)
    for rel in ("Tests/foo.gd", "TEST/bar.gd", "Test_Something.gd", "something_Test.gd"):
        assert predicate.is_test_path(root / rel)


def test_analyzer_with_hand_built_scan(tmp_path):
    tmp_path = tmp_path.resolve()
    main = tmp_path / "main.gd"
    test_file = tmp_path / "tests" / "t.gd"
    scan = ScanResult(
        definitions=[
            FunctionDefinition(name="a", file=main, line=1),
            FunctionDefinition(name="b", file=main, line=5),
            FunctionDefinition(name="c", file=main, line=9),
        ]
    )
    scan.add_reference("a", main, 1)  # declaration line only
    scan.add_reference("b", main, 2)
    scan.add_reference("c", test_file, 3)

    analyzer = ReachabilityAnalyzer(scan, DefaultTestPathPredicate(tmp_path))
    result = analyzer.analyze()
    assert [fd.name for fd in result.unused] == ["a"]
    assert [fd.name for fd in result.test_only] == ["c"]
    assert analyzer.qualifying_references(scan.definitions[0]) == set()


def test_analyzer_handles_broken_symlinks(tmp_path):
    link = tmp_path / "dangling.gd"
    link.symlink_to(tmp_path / "missing.gd")
    scan = ScanResult(definitions=[FunctionDefinition(name="gone", file=link, line=1)])
    scan.add_reference("gone", link, 1)
    unused = ReachabilityAnalyzer(scan, FilenamePrefixPredicate()).find_unused()
    assert [fd.name for fd in unused] == ["gone"]
