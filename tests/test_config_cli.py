# tests/test_config_cli.py
from __future__ import annotations

import pytest

from hamming import config as CONFIG
from hamming.bounds import safe_index_limit
from hamming.cli import main, parse_index
from hamming.errors import UserInputError
from hamming.fmt import abbr_int_fast, dec_digits, format_duration, strip_ansi
from hamming.progress import Progress
from hamming.runtime import APPLY, CFG
from hamming.runtime import current as _rt_current
from hamming.workspace import ensure_workspace_seeded, packaged_profiles, seed_workspace, workspace_dir

# ---------- workspace & profiles ---------------------------------------------


def test_workspace_is_seeded_with_profiles():
    root, seeded, copied = ensure_workspace_seeded()
    assert root == workspace_dir()
    assert seeded
    assert copied["profiles"] >= 1
    assert (root / "profiles" / "default.toml").exists()
    # second call copies nothing
    _, seeded_again, _ = ensure_workspace_seeded()
    assert not seeded_again


def test_load_default_profile():
    ensure_workspace_seeded()
    s = CONFIG.load_settings("default")
    assert s.name == "default"
    assert s.description != "(no description)"
    assert "PROFILE" not in s.as_dict()
    APPLY(s)
    assert CFG("BOUNDED.WORD_BITS") == 64
    assert CFG("SOLVER.DEFAULT_METHOD") == "windowed"
    assert CFG("MISSING.KEY", "fallback") == "fallback"


def test_profile_listing_and_current():
    ensure_workspace_seeded()
    names = [n for n, _ in CONFIG.list_profiles_with_descriptions()]
    assert {"default", "huge", "word32"} <= set(names)
    assert CONFIG.read_current_profile() is None
    CONFIG.write_current_profile("huge.toml")
    assert CONFIG.read_current_profile() == "huge"


def test_broken_profile_reports_location():
    ensure_workspace_seeded()
    (workspace_dir() / "profiles" / "broken.toml").write_text("[SOLVER\nX = 1\n", encoding="utf-8")
    with pytest.raises(UserInputError, match=r"broken\.toml.*line 1"):
        CONFIG.load_settings("broken")


def test_missing_profile():
    ensure_workspace_seeded()
    with pytest.raises(UserInputError):
        CONFIG.load_settings("does-not-exist")


def test_profile_flags_sync_runtime():
    APPLY({"BEHAVIOUR": {"DEBUG": True, "PROGRESS": False}})
    rt = _rt_current()
    assert rt.debug is True
    assert rt.progress is False


def test_loaded_profile_names_the_runtime():
    ensure_workspace_seeded()
    APPLY(CONFIG.load_settings("word32"))
    rt = _rt_current()
    assert rt.profile_name == "word32"
    assert rt.progress is False
    assert CFG("BOUNDED.WORD_BITS") == 32
    # a leaf value is not descended into
    assert CFG("BOUNDED.WORD_BITS.X", "none") == "none"


def test_seeding_keeps_user_edits_unless_overwriting():
    assert {"default.toml", "huge.toml", "word32.toml"} <= set(packaged_profiles())
    root, _, _ = ensure_workspace_seeded()
    edited = root / "profiles" / "default.toml"
    edited.write_text("# mine\n", encoding="utf-8")
    _, copied = seed_workspace()
    assert copied["profiles"] == 0
    assert edited.read_text(encoding="utf-8") == "# mine\n"
    _, copied = seed_workspace(overwrite=True)
    assert copied["profiles"] == len(packaged_profiles())
    assert "# mine" not in edited.read_text(encoding="utf-8")


# ---------- formatting --------------------------------------------------------


@pytest.mark.parametrize("seconds,expected", [
    (0.0123, "12 ms"),
    (2.5, "2.500 s"),
    (61.5, "1:01.500"),
    (3723.25, "1:02:03.250"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_abbr_and_digits():
    assert dec_digits(0) == 1
    assert dec_digits(10 ** 40) == 41
    n = 10 ** 50 + 123
    s = abbr_int_fast(n)
    assert s.startswith("1000000000") and s.endswith("0000000123") and "…" in s


# ---------- index parsing -----------------------------------------------------


@pytest.mark.parametrize("text,expected", [
    ("0", 0),
    ("1500", 1500),
    ("1_000_000", 1_000_000),
    ("1,000", 1000),
    ("4e9", 4_000_000_000),
    ("1.5e6", 1_500_000),
])
def test_parse_index(text, expected):
    assert parse_index(text) == expected


@pytest.mark.parametrize("text", ["-1", "abc", "1.5", "inf", "nan"])
def test_parse_index_rejects(text):
    with pytest.raises(UserInputError):
        parse_index(text)


# ---------- command line ------------------------------------------------------


def test_cli_single_index(capsys):
    assert main(["1499", "--quiet"]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "H(1_499) = 2^17 * 3^8 * 5^0" in out
    assert "859963392" in out


def test_cli_all_methods_report_timings(capsys):
    assert main(["6", "--method", "all"]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "= 8" in out
    for name in ("bounded", "dense", "windowed"):
        assert f"[{name}]" in out


def test_cli_all_skips_bounded_when_too_large(capsys):
    n = safe_index_limit(32) + 1
    assert main([str(n), "--method", "all", "--bits", "32"]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "[bounded] skipped" in out
    assert "[windowed]" in out


def test_cli_bounded_out_of_range_is_user_error(capsys):
    assert main(["20000", "--method", "bounded"]) == 2
    err = strip_ansi(capsys.readouterr().err)
    assert "Error:" in err
    assert "exceeds" in err


@pytest.mark.parametrize("argv", [["abc"], ["-3"], ["10", "--method", "naive"], ["10", "--profile", "nope"]])
def test_cli_bad_input(argv, capsys):
    assert main(argv) == 2
    assert "Error:" in strip_ansi(capsys.readouterr().err)


def test_cli_timeout_prints_partial(capsys):
    rc = main(["200000", "--method", "dense", "--timeout", "1e-9"])
    out = strip_ansi(capsys.readouterr().out)
    assert rc == 2
    assert "stopped at index" in out


def test_cli_commands(capsys):
    assert main(["list"]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "bounded" in out and "dense" in out and "windowed" in out

    assert main(["limit", "--bits", "16"]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert f"0..{safe_index_limit(16)}" in out

    assert main(["profiles"]) == 0
    assert "default" in capsys.readouterr().out

    assert main(["where"]) == 0
    assert str(workspace_dir()) in capsys.readouterr().out


def test_cli_profile_is_remembered(capsys):
    assert main(["10", "--profile", "word32", "--quiet"]) == 0
    capsys.readouterr()
    assert CONFIG.read_current_profile() == "word32"


def test_cli_no_arguments_prints_usage(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out.lower()


def test_cli_timeout_zero_means_no_limit(capsys):
    # longer than one checkpoint, and the profile budget is lifted too
    assert main(["100000", "--method", "windowed", "--timeout", "0", "--profile", "word32", "--quiet"]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "H(100_000) = " in out
    assert "stopped at index" not in out


@pytest.mark.parametrize("argv", [
    ["limit", "--bits", "2"],
    ["5", "--method", "all", "--bits", "0"],
    ["5", "--method", "bounded", "--bits", "-8"],
    ["5", "--timeout", "-1"],
])
def test_cli_bad_option_values(argv, capsys):
    assert main(argv) == 2
    err = strip_ansi(capsys.readouterr().err)
    assert "Error:" in err
    assert "Unexpected error" not in err


def test_progress_is_silent_when_not_a_terminal(capsys):
    bar = Progress(100, enabled=True, label="windowed")
    assert bar.enabled is False
    bar(50, 100)
    bar.done()
    assert capsys.readouterr().out == ""


def test_cli_output_has_no_progress_redraws_when_piped(capsys):
    assert main(["100000", "--method", "dense"]) == 0
    out = capsys.readouterr().out
    assert "\r" not in out
