from pathlib import Path

import pytest

from ballista.providers import (
    ApplicationsProvider,
    CalculatorProvider,
    PathsProvider,
    ShellProvider,
    UnitsProvider,
)
from ballista.providers.applications import exec_argv, parse_desktop_file
from ballista.providers.calculator import CalculationError, evaluate


class RecordingPopen:
    calls: list[list[str]] = []

    def __init__(self, argv, **kwargs):
        RecordingPopen.calls.append(list(argv))


@pytest.fixture
def popen(monkeypatch):
    RecordingPopen.calls = []
    monkeypatch.setattr("subprocess.Popen", RecordingPopen)
    return RecordingPopen


class TestCalculator:
    @pytest.mark.parametrize(
        "query, expected",
        [
            ("2+3*4", "14"),
            ("(1+2)/4", "0.75"),
            ("2^10", "1024"),
            ("7 // 2", "3"),
            ("-3 + 1", "-2"),
        ],
    )
    def test_evaluates_arithmetic(self, query, expected):
        results = CalculatorProvider().search(query)
        assert len(results) == 1
        assert results[0].completion == expected
        assert results[0].priority == 0

    @pytest.mark.parametrize(
        "query",
        ["", "firefox", "42", "1/0", "2**", "2 ** 99999", "((2**1000)**1000)**1000", "(-8)**0.5"],
    )
    def test_ignores_non_arithmetic_and_errors(self, query):
        assert CalculatorProvider().search(query) == []

    def test_rejects_names(self):
        with pytest.raises(CalculationError):
            evaluate("__import__('os')")

    @pytest.mark.parametrize("expression", ["(2**1000)**1000", "(2**1000)**9 * (2**1000)**9"])
    def test_oversized_results_are_refused(self, expression):
        with pytest.raises(CalculationError, match="too large"):
            evaluate(expression)

    def test_large_result_within_bound(self):
        assert evaluate("2**1000") == 2**1000

    def test_activate_returns_value(self):
        provider = CalculatorProvider()
        result = provider.search("6*7")[0]
        assert provider.activate(result).output == "42"


class TestUnits:
    @pytest.mark.parametrize(
        "query, expected",
        [
            ("10 km to mi", "6.213712"),
            ("100 c to f", "212"),
            ("5 in in cm", "12.7"),
            ("2 GiB to MiB", "2048"),
            ("90 minutes in hours", "1.5"),
        ],
    )
    def test_converts(self, query, expected):
        results = UnitsProvider().search(query)
        assert len(results) == 1
        assert results[0].completion == expected

    @pytest.mark.parametrize("query", ["5 kg to m", "ten km to mi", "10 km", "10 parsec to m"])
    def test_rejects_incompatible_or_unparsed(self, query):
        assert UnitsProvider().search(query) == []


class TestPaths:
    @pytest.fixture
    def tree(self, tmp_path: Path) -> Path:
        (tmp_path / "albums").mkdir()
        (tmp_path / "alpha.txt").write_text("a")
        (tmp_path / "beta.txt").write_text("b")
        (tmp_path / ".alias").write_text("hidden")
        return tmp_path

    def test_lists_matching_entries(self, tree):
        results = PathsProvider().search(f"{tree}/al")
        names = [r.name for r in results]
        assert sorted(names) == ["albums/", "alpha.txt"]
        by_name = {r.name: r for r in results}
        assert by_name["albums/"].completion == f"{tree}/albums/"
        assert by_name["albums/"].kind == "directory"
        assert by_name["alpha.txt"].payload == str(tree / "alpha.txt")

    def test_hidden_entries_need_a_dot(self, tree):
        assert [r.name for r in PathsProvider().search(f"{tree}/.al")] == [".alias"]
        assert ".alias" not in [r.name for r in PathsProvider().search(f"{tree}/")]

    def test_home_prefix_is_kept_in_completion(self, tree, monkeypatch):
        monkeypatch.setenv("HOME", str(tree))
        results = PathsProvider().search("~/be")
        assert [r.completion for r in results] == ["~/beta.txt"]

    def test_non_path_queries_are_ignored(self, tree):
        assert PathsProvider().search("firefox") == []
        assert PathsProvider().search(f"{tree}/missing/x") == []

    def test_respects_max_results(self, tree):
        assert len(PathsProvider(max_results=1).search(f"{tree}/")) == 1

    def test_activate_uses_opener(self, tree, popen):
        provider = PathsProvider(opener="my-open")
        result = provider.search(f"{tree}/beta")[0]
        assert provider.activate(result).success
        assert popen.calls == [["my-open", str(tree / "beta.txt")]]


class TestShell:
    def test_offers_command_when_executable_exists(self, monkeypatch):
        monkeypatch.setattr(
            "ballista.providers.shell.shutil.which",
            lambda name: f"/usr/bin/{name}" if name == "ls" else None,
        )
        results = ShellProvider().search("ls -la /tmp")
        assert [r.name for r in results] == ["ls -la /tmp"]
        assert ShellProvider().search("nosuchcommand") == []

    def test_unbalanced_quotes_still_resolve(self, monkeypatch):
        monkeypatch.setattr("ballista.providers.shell.shutil.which", lambda name: "/bin/echo")
        assert len(ShellProvider().search('echo "half')) == 1

    def test_activate_runs_through_shell(self, monkeypatch, popen):
        monkeypatch.setattr("ballista.providers.shell.shutil.which", lambda name: "/bin/echo")
        provider = ShellProvider(shell="/bin/bash")
        result = provider.search("echo hi")[0]
        assert provider.activate(result).success
        assert popen.calls == [["/bin/bash", "-c", "echo hi"]]


DESKTOP_TEMPLATE = """[Desktop Entry]
Type=Application
Name={name}
Exec={exec_line}
Icon={icon}
{extra}
"""


def _desktop(directory: Path, filename: str, name: str, exec_line: str, icon: str = "", extra: str = "") -> Path:
    path = directory / filename
    path.write_text(
        DESKTOP_TEMPLATE.format(name=name, exec_line=exec_line, icon=icon, extra=extra),
        encoding="utf-8",
    )
    return path


class TestApplications:
    @pytest.fixture
    def app_dir(self, tmp_path: Path) -> Path:
        d = tmp_path / "applications"
        d.mkdir()
        _desktop(d, "firefox.desktop", "Firefox", "firefox %u", icon="firefox")
        _desktop(d, "files.desktop", "Files", "nautilus --new-window %U")
        _desktop(d, "gfire.desktop", "Campfire", "campfire")
        _desktop(d, "htop.desktop", "Htop", "htop", extra="Terminal=true")
        _desktop(d, "hidden.desktop", "Fire Secret", "secret", extra="NoDisplay=true")
        return d

    def test_prefix_matches_rank_before_substring(self, app_dir):
        results = ApplicationsProvider([app_dir]).search("fi")
        assert [r.name for r in results] == ["Files", "Firefox", "Campfire"]
        results = ApplicationsProvider([app_dir]).search("fire")
        assert [r.name for r in results] == ["Firefox", "Campfire"]
        assert results[0].priority < results[1].priority

    def test_nodisplay_entries_are_skipped(self, app_dir):
        assert ApplicationsProvider([app_dir]).search("secret") == []

    def test_earlier_directory_shadows_later(self, tmp_path, app_dir):
        user_dir = tmp_path / "user"
        user_dir.mkdir()
        _desktop(user_dir, "firefox.desktop", "Firefox Nightly", "firefox-nightly")
        results = ApplicationsProvider([user_dir, app_dir]).search("firefox")
        assert [r.name for r in results] == ["Firefox Nightly"]

    def test_exec_field_codes_are_stripped(self):
        assert exec_argv("nautilus --new-window %U") == ["nautilus", "--new-window"]
        assert exec_argv("printf 100%% %f") == ["printf", "100%"]

    def test_parse_rejects_non_applications(self, tmp_path):
        link = tmp_path / "link.desktop"
        link.write_text("[Desktop Entry]\nType=Link\nName=Docs\nURL=https://example.org\n")
        assert parse_desktop_file(link) is None
        assert parse_desktop_file(tmp_path / "absent.desktop") is None

    def test_activate_spawns_exec_line(self, app_dir, popen):
        provider = ApplicationsProvider([app_dir])
        result = provider.search("firefox")[0]
        assert provider.activate(result).success
        assert popen.calls == [["firefox"]]

    def test_terminal_apps_run_in_terminal(self, app_dir, popen):
        provider = ApplicationsProvider([app_dir], terminal="foot")
        result = provider.search("htop")[0]
        provider.activate(result)
        assert popen.calls == [["foot", "-e", "htop"]]

    def test_activate_reports_missing_binary(self, app_dir, monkeypatch):
        def boom(*args, **kwargs):
            raise FileNotFoundError("firefox")

        monkeypatch.setattr("subprocess.Popen", boom)
        provider = ApplicationsProvider([app_dir])
        outcome = provider.activate(provider.search("firefox")[0])
        assert outcome.success is False
        assert "Firefox" in outcome.error
