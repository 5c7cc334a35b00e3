from poolpass.charsets import AMBIGUOUS
from poolpass.cli import main
from poolpass.config import load_config


def _passwords(out):
    found = []
    for line in out.splitlines():
        if line.startswith("Password #"):
            found.append(line.split(": ", 1)[1].rsplit("  (", 1)[0])
    return found

def test_generate_prints_passwords(capsys):
    assert main(["generate", "--length", "12", "--copies", "3", "--exclude-ambiguous"]) == 0
    pws = _passwords(capsys.readouterr().out)
    assert len(pws) == 3
    for pw in pws:
        assert len(pw) == 12
        assert not set(pw) & AMBIGUOUS

def test_generate_digits_only(capsys):
    assert main(["generate", "--length", "6", "--no-upper", "--no-lower", "--no-symbols"]) == 0
    out = capsys.readouterr().out
    pw = _passwords(out)[0]
    assert pw.isdigit()
    assert "/100" in out

def test_generate_with_nothing_enabled_fails(capsys):
    rc = main(["generate", "--no-upper", "--no-lower", "--no-digits", "--no-symbols"])
    assert rc == 2
    out = capsys.readouterr().out
    assert "No characters available" in out
    assert _passwords(out) == []

def test_generate_length_out_of_range(capsys):
    assert main(["generate", "--length", "40"]) == 2
    assert "between 4 and 32" in capsys.readouterr().out

def test_score_command(capsys):
    assert main(["score", "Ab3!"]) == 0
    out = capsys.readouterr().out
    assert "62" in out
    assert "Strong" in out

def test_score_with_categories(capsys):
    assert main(["score", "abcdefgh", "--categories", "lowercase"]) == 0
    out = capsys.readouterr().out
    assert "37" in out
    assert "Moderate" in out

def test_pool_command(capsys):
    assert main(["pool", "--no-upper", "--no-digits", "--no-symbols", "--exclude-ambiguous"]) == 0
    out = capsys.readouterr().out
    assert "abcdefghijkmnpqrstuvwxyz" in out
    assert "24" in out

def test_config_set_and_show(capsys):
    assert main(["config", "set", "length", "20"]) == 0
    assert main(["config", "set", "exclude_ambiguous", "yes"]) == 0
    cfg = load_config()
    assert cfg["length"] == 20
    assert cfg["exclude_ambiguous"] is True
    capsys.readouterr()

    assert main(["generate"]) == 0
    pw = _passwords(capsys.readouterr().out)[0]
    assert len(pw) == 20
    assert not set(pw) & AMBIGUOUS

    assert main(["config", "show"]) == 0
    assert "exclude_ambiguous" in capsys.readouterr().out

def test_config_set_rejects_invalid(capsys):
    assert main(["config", "set", "length", "99"]) == 2
    assert main(["config", "set", "colour", "red"]) == 2
    assert main(["config", "set", "categories", "emoji"]) == 2
    assert load_config()["length"] == 16

def test_generate_random_source_failure(capsys, monkeypatch):
    def broken(n):
        raise OSError("no entropy")
    monkeypatch.setattr("poolpass.generator.os.urandom", broken)
    assert main(["generate", "--length", "12"]) == 2
    out = capsys.readouterr().out
    assert "unavailable" in out
    assert _passwords(out) == []

def test_generate_rejects_non_positive_copies(capsys):
    for copies in ("0", "-3"):
        assert main(["generate", "--copies", copies]) == 2
    out = capsys.readouterr().out
    assert "copies must be at least 1" in out
    assert _passwords(out) == []

def test_generate_with_mistyped_config_falls_back(isolated_config, capsys):
    isolated_config.write_text('{"length": null, "categories": 5}', encoding="utf-8")
    assert main(["generate"]) == 0
    pw = _passwords(capsys.readouterr().out)[0]
    assert len(pw) == 16
