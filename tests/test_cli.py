"""End-to-end tests for the s2dood command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from s2dood import __version__
from s2dood.__main__ import main


BODY = (
    '    <ObjectDoodad Position="1,2,3" Type="T1"/>\n'
    '    <ObjectDoodad Position="4,5,6" Type="T2">\n'
    '        <Flag Index="HeightOffset" Value="1"/>\n'
    '    </ObjectDoodad>'
)


def test_dump_galaxy(make_map, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    map_dir = make_map("Arena", BODY)
    output = tmp_path / "doodads.galaxy"

    assert main(["dump", str(output), str(map_dir)]) == 0

    script = output.read_text(encoding="utf-8")
    assert script.startswith("void gf__opopulate_Arena(int lp_base) {\n")
    assert 'gv__o[lp_base + 1].lv_flags = 0x1;' in script
    assert script.endswith("gv__oc += 2;\n}\n")
    assert "Exported 2 entries from 1 maps" in capsys.readouterr().out


def test_dump_catalog(make_map, tmp_path: Path) -> None:
    map_dir = make_map("Arena", BODY)
    output = tmp_path / "doodads.xml"

    assert main(["dump", str(output), str(map_dir), "--format", "catalog"]) == 0

    text = output.read_text(encoding="utf-8")
    assert '<CUser id="Arena">' in text
    assert text.endswith("</Catalog>\n")


def test_missing_map_is_skipped(make_map, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    map_dir = make_map("Arena", BODY)
    output = tmp_path / "doodads.galaxy"

    assert main(["dump", str(output), str(tmp_path / "Nowhere.SC2Map"), str(map_dir)]) == 0

    out = capsys.readouterr().out
    assert "Objects file not found for Nowhere" in out
    assert "Exported 2 entries from 1 maps" in out


def test_unknown_format_is_fatal(make_map, tmp_path: Path) -> None:
    map_dir = make_map("Arena", BODY)
    output = tmp_path / "doodads.txt"

    assert main(["dump", str(output), str(map_dir), "--format", "yaml"]) == 1
    assert not output.exists()


def test_missing_output_directory_is_fatal(make_map, tmp_path: Path) -> None:
    map_dir = make_map("Arena", BODY)
    output = tmp_path / "missing" / "doodads.galaxy"

    assert main(["dump", str(output), str(map_dir)]) == 1
    assert not output.parent.exists()


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage: s2dood" in capsys.readouterr().out


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out
