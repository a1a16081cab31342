import pytest

from luminoveau.ini import (
    IniFile,
    IniMap,
    LineKind,
    generate_ini,
    parse_ini,
    parse_line,
)

SAMPLE = (
    "; settings\n"
    "[Video]\n"
    "Vsync = true\n"
    "Width=1280\n"
    "\n"
    "[Audio]\n"
    "Master=100\n"
)


def test_parse_line_empty_and_comment():
    assert parse_line("   ") == (LineKind.NONE, "", "")
    assert parse_line("  ; a note") == (LineKind.COMMENT, "", "")


def test_parse_line_section_with_trailing_comment():
    assert parse_line("[ Video ] ; display") == (LineKind.SECTION, "Video", "")


def test_parse_line_key_value_trimmed():
    assert parse_line("  Width =  1280 ") == (LineKind.KEYVALUE, "Width", "1280")


def test_parse_line_escaped_equals_in_key():
    kind, key, value = parse_line("a\\=b=c")
    assert kind is LineKind.KEYVALUE
    assert key == "a=b"
    assert value == "c"


def test_parse_line_unknown():
    assert parse_line("just words")[0] is LineKind.UNKNOWN


def test_map_keys_case_insensitive_and_trimmed():
    m = IniMap()
    m["  Key "] = "v"
    assert m.has("KEY")
    assert "key" in m
    assert m["kEy"] == "v"
    assert list(m) == ["key"]


def test_map_getitem_inserts_empty_value():
    m = IniMap()
    assert m["missing"] == ""
    assert len(m) == 1


def test_map_get_does_not_insert():
    m = IniMap()
    assert m.get("missing") == ""
    assert m.get("missing", "x") == "x"
    assert len(m) == 0


def test_map_order_and_remove():
    m = IniMap()
    m.set_many([("a", "1"), ("b", "2"), ("c", "3")])
    assert m.remove("b") is True
    assert m.remove("b") is False
    m.set("a", "9")
    assert list(m.items()) == [("a", "9"), ("c", "3")]


def test_map_clear():
    m = IniMap()
    m.set_many({"a": "1"})
    m.clear()
    assert len(m) == 0


def test_copy_is_independent():
    data = parse_ini("[s]\nk=v\n")
    duplicate = data.copy()
    duplicate["s"]["k"] = "other"
    assert data["s"]["k"] == "v"
    assert data.get("s")["k"] == "v"


def test_parse_ini_ignores_keys_outside_sections():
    data = parse_ini("top=1\n[Video]\nWidth=1280\r\n")
    assert list(data) == ["video"]
    assert data["video"]["width"] == "1280"


def test_parse_ini_structure_creates_sections():
    data = parse_ini("")
    data["New"]["key"] = "value"
    assert data["new"].get("key") == "value"


def test_parse_ini_empty():
    assert len(parse_ini("")) == 0


def test_generate_round_trip():
    data = parse_ini("")
    data["Video"]["Width"] = " 1280 "
    data["Audio"]["a=b"] = "1"
    text = generate_ini(data)
    assert text.splitlines() == ["[video]", "width=1280", "[audio]", "a\\=b=1"]
    assert parse_ini(text) == parse_ini(generate_ini(data, True))


def test_generate_pretty_separates_sections():
    data = parse_ini("[a]\nx=1\n[b]\ny=2\n")
    assert generate_ini(data, pretty=True).splitlines() == [
        "[a]", "x = 1", "", "[b]", "y = 2",
    ]


def test_file_generate_and_read(tmp_path):
    path = tmp_path / "settings.ini"
    data = parse_ini("[Video]\nVsync=true\n")
    IniFile(path).generate(data)
    assert IniFile(path).read() == data


def test_write_creates_missing_file(tmp_path):
    path = tmp_path / "new.ini"
    data = parse_ini("[Video]\nVsync=true\n")
    IniFile(path).write(data)
    assert IniFile(path).read() == data


def test_lazy_write_keeps_comments_updates_and_removes(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text(SAMPLE)
    ini = IniFile(path)
    data = ini.read()
    data["video"]["vsync"] = "false"
    data["video"]["height"] = "720"
    data.remove("audio")
    ini.write(data)
    assert path.read_text().splitlines() == [
        "; settings",
        "[Video]",
        "Vsync = false",
        "Width=1280",
        "height=720",
    ]
    assert ini.read() == data


def test_lazy_write_drops_removed_key(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text(SAMPLE)
    ini = IniFile(path)
    data = ini.read()
    data["video"].remove("width")
    ini.write(data)
    result = ini.read()
    assert result == data
    assert not result["video"].has("width")


def test_lazy_write_pretty_appends_new_section(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text("[a]\nx=1")
    ini = IniFile(path)
    data = ini.read()
    data["b"]["y"] = "2"
    ini.write(data, pretty=True)
    assert path.read_text().splitlines() == ["[a]", "x=1", "", "[b]", "y = 2"]


def test_lazy_write_pretty_pads_changed_value(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text("[a]\nx=1")
    ini = IniFile(path)
    data = ini.read()
    data["a"]["x"] = "2"
    ini.write(data, pretty=True)
    assert path.read_text().splitlines() == ["[a]", "x= 2"]


def test_empty_filename_raises():
    with pytest.raises(ValueError):
        IniFile("").read()


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        IniFile(tmp_path / "absent.ini").read()