from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from xsltsmith.adapters import engines as engines_mod
from xsltsmith.core.exceptions import EngineNotFoundError, ProcessSpawnError
from xsltsmith.core.models import EngineChoice, ResolvedEngine


SAXON = ResolvedEngine(EngineChoice.SAXON, "/usr/bin/saxon")
XSLTPROC = ResolvedEngine(EngineChoice.XSLTPROC, "/usr/bin/xsltproc")


def _which_from(available: dict[str, str]) -> Any:
    calls: list[str] = []

    def fake_which(name: str) -> str | None:
        calls.append(name)
        return available.get(name)

    fake_which.calls = calls  # type: ignore[attr-defined]
    return fake_which


def test_probe_prefers_saxon(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        engines_mod.shutil,
        "which",
        _which_from({"saxon": "/opt/saxon", "xsltproc": "/usr/bin/xsltproc"}),
    )
    assert engines_mod.probe_engine() == ResolvedEngine(EngineChoice.SAXON, "/opt/saxon")


def test_probe_falls_back_to_xsltproc(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        engines_mod.shutil, "which", _which_from({"xsltproc": "/usr/bin/xsltproc"})
    )
    assert engines_mod.probe_engine() == XSLTPROC


def test_probe_without_engines_is_unconfigured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(engines_mod.shutil, "which", _which_from({}))
    resolved = engines_mod.probe_engine()
    assert resolved.choice is EngineChoice.UNCONFIGURED
    assert resolved.configured is False


def test_probe_tolerates_lookup_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(_: str) -> None:
        raise OSError("broken PATH")

    monkeypatch.setattr(engines_mod.shutil, "which", fail)
    assert engines_mod.probe_engine().choice is EngineChoice.UNCONFIGURED


def test_build_argv_orders_paths_per_engine() -> None:
    params = ["a=1", "b=2"]
    saxon = engines_mod.build_argv(SAXON, params, "style.xsl", "doc.xml")
    xsltproc = engines_mod.build_argv(XSLTPROC, params, "style.xsl", "doc.xml")

    assert saxon == ["/usr/bin/saxon", "a=1", "b=2", "doc.xml", "style.xsl"]
    assert xsltproc == ["/usr/bin/xsltproc", "a=1", "b=2", "style.xsl", "doc.xml"]
    assert saxon[-2:] == list(reversed(xsltproc[-2:]))


def test_build_argv_filters_empty_parameters() -> None:
    argv = engines_mod.build_argv(XSLTPROC, ["", "k=v", ""], Path("s.xsl"), Path("d.xml"))
    assert argv == ["/usr/bin/xsltproc", "k=v", "s.xsl", "d.xml"]


def test_build_argv_rejects_unconfigured_engine() -> None:
    with pytest.raises(EngineNotFoundError):
        engines_mod.build_argv(
            ResolvedEngine(EngineChoice.UNCONFIGURED), [], "s.xsl", "d.xml"
        )


@pytest.mark.parametrize(
    ("command", "expected"),
    [
        ("saxon", EngineChoice.SAXON),
        ("/usr/local/bin/xsltproc", EngineChoice.XSLTPROC),
        ("C:/tools/Saxon.EXE", EngineChoice.SAXON),
        ("xalan", EngineChoice.UNCONFIGURED),
    ],
)
def test_engine_for_command(command: str, expected: EngineChoice) -> None:
    assert engines_mod.engine_for_command(command) is expected


def test_runner_memoises_successful_probe(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_which = _which_from({"xsltproc": "/usr/bin/xsltproc"})
    monkeypatch.setattr(engines_mod.shutil, "which", fake_which)
    runner = engines_mod.EngineRunner()

    assert runner.resolve() == XSLTPROC
    probes = len(fake_which.calls)
    assert runner.resolve() == XSLTPROC
    assert len(fake_which.calls) == probes

    runner.reset()
    runner.resolve()
    assert len(fake_which.calls) > probes


def test_runner_does_not_memoise_missing_engine(monkeypatch: pytest.MonkeyPatch) -> None:
    available: dict[str, str] = {}
    monkeypatch.setattr(engines_mod.shutil, "which", _which_from(available))
    runner = engines_mod.EngineRunner()

    assert runner.is_available() is False
    available["saxon"] = "/usr/bin/saxon"
    assert runner.resolve() == SAXON


def test_runner_explicit_command_on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        engines_mod.shutil,
        "which",
        _which_from({"saxon": "/usr/bin/saxon", "xsltproc": "/usr/bin/xsltproc"}),
    )
    runner = engines_mod.EngineRunner("xsltproc")
    assert runner.resolve() == XSLTPROC


def test_runner_explicit_command_path(tmp_path: Path) -> None:
    binary = tmp_path / "saxon"
    binary.write_text("#!/bin/sh\n", encoding="utf-8")
    runner = engines_mod.EngineRunner(str(binary))
    assert runner.resolve() == ResolvedEngine(EngineChoice.SAXON, str(binary))


def test_runner_rejects_unknown_command() -> None:
    runner = engines_mod.EngineRunner("xalan")
    with pytest.raises(EngineNotFoundError, match="expected saxon or xsltproc"):
        runner.resolve()
    assert runner.is_available() is False


def test_runner_rejects_missing_command_path(tmp_path: Path) -> None:
    runner = engines_mod.EngineRunner(str(tmp_path / "bin" / "xsltproc"))
    with pytest.raises(EngineNotFoundError, match="does not exist"):
        runner.resolve()


def test_set_engine_command_overrides_probe(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        engines_mod.shutil,
        "which",
        _which_from({"saxon": "/usr/bin/saxon", "xsltproc": "/usr/bin/xsltproc"}),
    )
    assert engines_mod.resolve_engine() == SAXON

    engines_mod.set_engine_command("xsltproc")
    assert engines_mod.get_engine_command() == "xsltproc"
    assert engines_mod.resolve_engine() == XSLTPROC

    engines_mod.set_engine_command(None)
    assert engines_mod.get_engine_command() is None
    assert engines_mod.resolve_engine() == SAXON


def test_runner_command_wins_over_configured_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        engines_mod.shutil,
        "which",
        _which_from({"saxon": "/usr/bin/saxon", "xsltproc": "/usr/bin/xsltproc"}),
    )
    assert engines_mod.EngineRunner().resolve("xsltproc") == XSLTPROC
    assert engines_mod.EngineRunner("saxon").resolve("xsltproc") == SAXON


def test_run_uses_argument_vector_and_merges_output(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded: dict[str, Any] = {}

    class _Completed:
        returncode = 0
        stdout = "ok"

    def fake_run(cmd: list[str], **kwargs: Any) -> _Completed:
        recorded["cmd"] = cmd
        recorded["kwargs"] = kwargs
        return _Completed()

    monkeypatch.setattr(engines_mod.subprocess, "run", fake_run)
    engines_mod.EngineRunner().run(("/usr/bin/xsltproc", "s.xsl", "d.xml"))

    assert recorded["cmd"] == ["/usr/bin/xsltproc", "s.xsl", "d.xml"]
    assert recorded["kwargs"]["stderr"] is engines_mod.subprocess.STDOUT
    assert recorded["kwargs"]["stdout"] is engines_mod.subprocess.PIPE
    assert recorded["kwargs"]["check"] is False
    assert "shell" not in recorded["kwargs"]


def test_run_spawn_failure_resets_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_which = _which_from({"xsltproc": "/usr/bin/xsltproc"})
    monkeypatch.setattr(engines_mod.shutil, "which", fake_which)

    def vanished(cmd: list[str], **kwargs: Any) -> None:
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(engines_mod.subprocess, "run", vanished)
    runner = engines_mod.EngineRunner()
    runner.resolve()
    probes = len(fake_which.calls)

    with pytest.raises(ProcessSpawnError) as excinfo:
        runner.run(["/usr/bin/xsltproc", "s.xsl", "d.xml"])
    assert excinfo.value.argv == ("/usr/bin/xsltproc", "s.xsl", "d.xml")

    runner.resolve()
    assert len(fake_which.calls) > probes


def test_run_permission_error_is_spawn_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def denied(cmd: list[str], **kwargs: Any) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(engines_mod.subprocess, "run", denied)
    with pytest.raises(ProcessSpawnError, match="denied"):
        engines_mod.EngineRunner().run(["/usr/bin/saxon"])


def test_available_engines_lists_all_found(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        engines_mod.shutil,
        "which",
        _which_from({"saxon": "/usr/bin/saxon", "xsltproc": "/usr/bin/xsltproc"}),
    )
    assert engines_mod.available_engines() == [SAXON, XSLTPROC]
