from smfwrite.basic import main, write_example


def test_write_example_creates_test_mid(tmp_path):
    path = write_example(tmp_path)
    assert path == tmp_path / "test.mid"
    data = path.read_bytes()
    assert data[:4] == b"MThd"
    assert data[12:14] == (480).to_bytes(2, "big")
    assert data[14:18] == b"MTrk"


def test_write_example_track_length(tmp_path):
    data = write_example(tmp_path).read_bytes()
    assert int.from_bytes(data[18:22], "big") == len(data) - 22


def test_write_example_contains_notes(tmp_path):
    data = write_example(tmp_path).read_bytes()
    assert data.count(b"\x91\x40\x7f") == 2
    assert data.count(b"\x81\x40\x00") == 2
    assert b"\xff\x51\x03" in data


def test_write_example_twice_picks_new_name(tmp_path):
    first = write_example(tmp_path)
    second = write_example(tmp_path)
    assert first.name == "test.mid"
    assert second.name == "test1.mid"
    assert first.read_bytes() == second.read_bytes()


def test_main_creates_directory(tmp_path, capsys):
    target = tmp_path / "output"
    assert main([str(target)]) == 0
    assert (target / "test.mid").exists()
    assert "test.mid" in capsys.readouterr().out