from retrohost.core.scanner import scan_roms
from retrohost.main import find_matches, main


def run(capsys, rom_library, *argv):
    rom_dir, data_dir = rom_library
    code = main(["--rom-dir", str(rom_dir), "--data-dir", str(data_dir), *argv])
    out, err = capsys.readouterr()
    return code, out, err


def test_list(capsys, rom_library):
    code, out, _ = run(capsys, rom_library, "list")
    assert code == 0
    lines = out.splitlines()
    assert lines[0].split() == ["SYSTEM", "ROM", "FILE"]
    assert any("Game Boy Advance" in l and "pokemon emerald.gba" in l for l in lines)
    gba = [l for l in lines if l.startswith("Game Boy Advance")]
    assert "emerald" in gba[0] and "Fire Red" in gba[1]


def test_list_empty(capsys, tmp_path):
    code = main(["--rom-dir", str(tmp_path), "--data-dir", str(tmp_path), "list"])
    assert code == 0
    assert "No ROMs found" in capsys.readouterr().out


def test_play_single_match(capsys, rom_library):
    code, out, _ = run(capsys, rom_library, "play", "zelda")
    assert code == 0
    assert "Open this URL to play Zelda:" in out
    assert "/player.html?system=gb&rom=Zelda.gb&core=gb" in out


def test_play_multiple_matches(capsys, rom_library):
    code, out, _ = run(capsys, rom_library, "play", "pokemon")
    assert code == 0
    assert "Multiple ROMs match 'pokemon'" in out
    assert out.count("[Game Boy Advance]") == 2


def test_play_no_match(capsys, rom_library):
    code, _, err = run(capsys, rom_library, "play", "sonic")
    assert code == 1
    assert "No ROM found matching 'sonic'" in err


def test_covers_summary(capsys, rom_library):
    code, out, _ = run(capsys, rom_library, "covers")
    assert code == 0
    assert "0/6 ROMs have covers (6 missing)" in out


def test_find_matches_searches_file_names(rom_library):
    rom_dir, _ = rom_library
    matches = find_matches(scan_roms(rom_dir), ".SMC")
    assert [r.name for r in matches] == ["Super Mario World"]
