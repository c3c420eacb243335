from retrohost.core.covers import check_covers, find_cover
from retrohost.core.scanner import find_rom_file, list_systems, scan_roms
from retrohost.core.systems import system_by_dir, system_by_extension, system_by_id
from retrohost.core.tag_store import load_tags
from retrohost.models.rom import RomRecord


def names(roms, system):
    return sorted(r.file_name for r in roms.get(system, []))


def test_scan_assigns_systems(rom_library):
    rom_dir, data_dir = rom_library
    roms = scan_roms(rom_dir, load_tags(data_dir))
    assert names(roms, "gba") == ["Pokemon Fire Red.gba", "pokemon emerald.gba"]
    assert names(roms, "snes") == ["Super Mario World.smc"]
    assert names(roms, "gb") == ["Zelda.gb"]
    assert names(roms, "nes") == ["Metroid.nes"]
    # Directory not named after a system: extension decides
    assert names(roms, "gbc") == ["Tetris.gbc"]


def test_scan_skips_saves_patches_and_unknown_files(rom_library):
    rom_dir, _ = rom_library
    roms = scan_roms(rom_dir)
    files = [r.file_name for records in roms.values() for r in records]
    assert "Pokemon Fire Red.sav" not in files
    assert "notes.ips" not in files
    assert "readme.txt" not in files


def test_system_directory_wins_over_extension(tmp_path):
    (tmp_path / "GBC").mkdir()
    (tmp_path / "GBC" / "Link.gb").write_bytes(b"x")
    roms = scan_roms(tmp_path)
    assert names(roms, "gbc") == ["Link.gb"]
    assert "gb" not in roms


def test_scan_applies_tags_and_display_names(rom_library):
    rom_dir, data_dir = rom_library
    roms = scan_roms(rom_dir, load_tags(data_dir))
    fire_red = next(r for r in roms["gba"] if r.file_name == "Pokemon Fire Red.gba")
    assert fire_red == RomRecord(name="Pokemon Fire Red", file_name="Pokemon Fire Red.gba", system="gba", tag="RPG")
    emerald = next(r for r in roms["gba"] if r.file_name == "pokemon emerald.gba")
    assert emerald.tag is None


def test_scan_missing_directory(tmp_path):
    assert scan_roms(tmp_path / "missing") == {}


def test_list_systems_in_table_order(rom_library):
    rom_dir, _ = rom_library
    systems = list_systems(scan_roms(rom_dir))
    assert [s.id for s in systems] == ["gb", "gbc", "gba", "nes", "snes"]
    gba = next(s for s in systems if s.id == "gba")
    assert (gba.name, gba.core, gba.rom_count) == ("Game Boy Advance", "vba_next", 2)


def test_load_tags_invalid_json(tmp_path):
    (tmp_path / "tags.json").write_text("{not json")
    assert load_tags(tmp_path) == {}


def test_load_tags_missing(tmp_path):
    assert load_tags(tmp_path) == {}


def test_system_lookups():
    assert system_by_id("snes").core == "snes"
    assert system_by_id("n64") is None
    assert system_by_extension(".SFC").id == "snes"
    assert system_by_dir("GBA").id == "gba"


def test_find_rom_file(rom_library):
    rom_dir, _ = rom_library
    assert find_rom_file(rom_dir, "Zelda.gb") == rom_dir / "Zelda.gb"
    assert find_rom_file(rom_dir, "../gba/Pokemon Fire Red.gba") == rom_dir / "gba" / "Pokemon Fire Red.gba"
    assert find_rom_file(rom_dir, "Missing.gb") is None


def test_covers(rom_library):
    rom_dir, data_dir = rom_library
    covers = data_dir / "covers" / "gb"
    covers.mkdir(parents=True)
    (covers / "Zelda.webp").write_bytes(b"img")

    roms = scan_roms(rom_dir)
    zelda = roms["gb"][0]
    assert find_cover(zelda, data_dir) == covers / "Zelda.webp"

    statuses = check_covers(roms, data_dir)
    assert [s.rom.system for s in statuses] == ["gb", "gbc", "gba", "gba", "nes", "snes"]
    assert [s.rom.name for s in statuses if s.rom.system == "gba"] == ["pokemon emerald", "Pokemon Fire Red"]
    assert [s.has_cover for s in statuses].count(True) == 1
