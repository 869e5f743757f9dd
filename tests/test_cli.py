import logging
from pathlib import Path

import pytest

from avsg import crypto
from avsg.cli import build_parser, main


@pytest.fixture(autouse=True)
def restore_root_logger():
    # main() reconfigures the root logger; put it back after each test.
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)


@pytest.fixture
def plain_save(tmp_path: Path, save_xml) -> Path:
    path = tmp_path / "AVSave0.xml"
    path.write_text(save_xml(), encoding="utf-8")
    return path


@pytest.fixture
def encrypted_save(tmp_path: Path, save_xml) -> Path:
    path = tmp_path / "AVSave0.sav"
    path.write_bytes(crypto.encode(save_xml().encode("utf-8")))
    return path


def test_parser_requires_a_command():
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args([])
    assert exc.value.code == 2


def test_encrypt_requires_output():
    with pytest.raises(SystemExit) as exc:
        main(["encrypt", "only-input.xml"])
    assert exc.value.code == 2


def test_achievements_unencrypted(plain_save: Path, capsys):
    rc = main(["achievements", "-u", str(plain_save)])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert out[0] == "Achievement Progress:"
    assert "  - 100% Map: 10/20 screens (50.00%)" in out
    assert "  - 100% Weapons: 1/20 (5.00%)" in out
    assert "  - Mostly Invincible: 0/1 deaths (OK)" in out
    assert out[-1] == "  - Sentinel: Alive"


def test_achievements_encrypted(encrypted_save: Path, capsys):
    assert main(["achievements", str(encrypted_save)]) == 0
    assert "  - Pacifist: Clone Alive (OK)" in capsys.readouterr().out


def test_encrypt_then_report(plain_save: Path, tmp_path: Path, capsys):
    out_path = tmp_path / "AVSave0.sav"
    assert main(["encrypt", str(plain_save), str(out_path)]) == 0
    assert main(["achievements", str(out_path)]) == 0
    assert "Achievement Progress:" in capsys.readouterr().out


def test_decrypt_to_file(encrypted_save: Path, tmp_path: Path, save_xml):
    out_path = tmp_path / "decrypted.xml"
    assert main(["decrypt", str(encrypted_save), str(out_path)]) == 0
    assert out_path.read_text(encoding="utf-8") == save_xml()


def test_decrypt_to_stdout(encrypted_save: Path, capsysbinary, save_xml):
    assert main(["decrypt", str(encrypted_save)]) == 0
    assert capsysbinary.readouterr().out == save_xml().encode("utf-8")


def test_decrypt_refuses_to_overwrite(encrypted_save: Path, tmp_path: Path, capsys):
    out_path = tmp_path / "exists.xml"
    out_path.write_text("keep", encoding="utf-8")

    assert main(["decrypt", str(encrypted_save), str(out_path)]) == 1
    assert capsys.readouterr().err.startswith("error: ")
    assert out_path.read_text(encoding="utf-8") == "keep"


def test_encrypt_refuses_to_overwrite(plain_save: Path, tmp_path: Path, capsys):
    out_path = tmp_path / "exists.sav"
    out_path.write_bytes(b"keep")

    assert main(["encrypt", str(plain_save), str(out_path)]) == 1
    assert "error:" in capsys.readouterr().err
    assert out_path.read_bytes() == b"keep"


def test_missing_input_is_reported(tmp_path: Path, capsys):
    assert main(["achievements", str(tmp_path / "missing.sav")]) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_plain_file_without_flag_fails(plain_save: Path, capsys):
    assert main(["achievements", str(plain_save)]) == 1
    assert "error:" in capsys.readouterr().err


def test_hacker_without_glitch_log(plain_save: Path, capsys):
    assert main(["hacker", "-u", str(plain_save)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "Hacker Achievement requires:",
        "  - All creatures required",
    ]


def test_hacker_lists_remaining(tmp_path: Path, save_xml, capsys):
    path = tmp_path / "AVSave0.xml"
    path.write_text(save_xml(extra="<CreatureGlitched>TubeWorm_Meta</CreatureGlitched>"), encoding="utf-8")

    assert main(["hacker", "-u", str(path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Hacker Achievement requires 58 more creatures:"
    assert "  - Green Sea Sponge (TubePuff)" not in out
    assert out[1] == "  - Hopping Spider (Arachnoptopus)"
    assert len(out) == 59


def test_config_file_controls_input_mode(plain_save: Path, tmp_path: Path, capsys):
    config = tmp_path / "settings.yaml"
    config.write_text("input:\n  unencrypted: true\n", encoding="utf-8")

    assert main(["--config", str(config), "achievements", str(plain_save)]) == 0
    assert capsys.readouterr().out.startswith("Achievement Progress:")


def test_command_line_overrides_configured_input_mode(encrypted_save: Path, plain_save: Path, tmp_path: Path, capsys):
    config = tmp_path / "settings.yaml"
    config.write_text("input:\n  unencrypted: true\n", encoding="utf-8")

    assert main(["--config", str(config), "achievements", str(encrypted_save)]) == 1
    assert main(["--config", str(config), "achievements", "--no-unencrypted", str(encrypted_save)]) == 0
    assert main(["--config", str(config), "hacker", "--no-unencrypted", str(encrypted_save)]) == 0
    assert main(["achievements", "--unencrypted", str(plain_save)]) == 0


def test_unencrypted_flag_defaults_to_unset():
    args = build_parser().parse_args(["achievements", "save.sav"])
    assert args.unencrypted is None
    assert build_parser().parse_args(["hacker", "-u", "save.sav"]).unencrypted is True


def test_config_file_can_relax_decoder(tmp_path: Path, save_xml, capsys):
    save = tmp_path / "AVSave0.xml"
    save.write_text(save_xml(extra="<mNewerField>1</mNewerField>"), encoding="utf-8")
    config = tmp_path / "settings.yaml"
    config.write_text("decoder:\n  strict: false\n", encoding="utf-8")

    assert main(["achievements", "-u", str(save)]) == 1
    assert main(["--config", str(config), "achievements", "-u", str(save)]) == 0


def test_missing_config_file_is_reported(plain_save: Path, tmp_path: Path, capsys):
    rc = main(["--config", str(tmp_path / "nope.yaml"), "achievements", "-u", str(plain_save)])
    assert rc == 1
    assert "Settings file not found" in capsys.readouterr().err
