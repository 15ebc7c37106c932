from proxyprep.styles import BUILT_IN_STYLES, list_styles, load_stylesheet


def test_builtins_only_without_dirs():
    assert list_styles([]) == ["Default", "Fusion"]


def test_missing_directory_ignored(tmp_path):
    assert list_styles([tmp_path / "missing"]) == list(BUILT_IN_STYLES)


def test_discovers_qss_files(tmp_path):
    (tmp_path / "dark.qss").write_text("a")
    (tmp_path / "light.QSS").write_text("b")
    (tmp_path / "notes.txt").write_text("c")
    (tmp_path / "folder.qss").mkdir()
    assert list_styles([tmp_path]) == ["Default", "Fusion", "dark", "light"]


def test_no_duplicates_across_dirs(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "dark.qss").write_text("a")
    (second / "dark.qss").write_text("b")
    (second / "Fusion.qss").write_text("c")
    styles = list_styles([first, second])
    assert styles.count("dark") == 1
    assert styles.count("Fusion") == 1


def test_base_name_stops_at_first_dot(tmp_path):
    (tmp_path / "neon.v2.qss").write_text("x")
    assert list_styles([tmp_path])[-1] == "neon"


def test_builtin_has_empty_sheet(tmp_path):
    (tmp_path / "Default.qss").write_text("ignored")
    assert load_stylesheet("Default", [tmp_path]) == ""


def test_loads_custom_sheet(tmp_path):
    content = "QWidget { color: red; }"
    (tmp_path / "red.qss").write_text(content)
    assert load_stylesheet("red", [tmp_path]) == content


def test_first_directory_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "red.qss").write_text("one")
    (second / "red.qss").write_text("two")
    assert load_stylesheet("red", [first, second]) == "one"
    assert load_stylesheet("red", [second, first]) == "two"


def test_missing_sheet_gives_none(tmp_path):
    assert load_stylesheet("absent", [tmp_path]) is None