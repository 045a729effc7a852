"""Tests for the command-line jobs."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from setforge.jobs import build_all, compile_set, render_set
from setforge.services.catalog_compiler import SetNotFoundError
from setforge.services.report_renderer import CatalogNotFoundError


class TestCompileJob:
    def test_success(self, sets_dir: Path) -> None:
        exit_code = compile_set.main(["xxvi", "--sets-dir", str(sets_dir)])

        assert exit_code == 0
        output = json.loads((sets_dir / "xxvi" / "output.json").read_text(encoding="utf-8"))
        assert len(output["cards"]) == 6

    def test_missing_argument(self, sets_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = compile_set.main(["--sets-dir", str(sets_dir)])

        assert exit_code == 1
        assert "usage:" in capsys.readouterr().err

    def test_missing_set_directory(self, sets_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("ERROR"):
            exit_code = compile_set.main(["nope", "--sets-dir", str(sets_dir)])

        assert exit_code == 1
        assert "does not exist" in caplog.text

    def test_missing_csv(self, sets_dir: Path) -> None:
        (sets_dir / "empty").mkdir()

        assert compile_set.main(["empty", "--sets-dir", str(sets_dir)]) == 1

    def test_run_compile_reraises(self, tmp_path: Path) -> None:
        with pytest.raises(SetNotFoundError):
            compile_set.run_compile("nope", tmp_path)


class TestRenderJob:
    def test_success(self, sets_dir: Path) -> None:
        compile_set.main(["xxvi", "--sets-dir", str(sets_dir)])

        assert render_set.main(["xxvi", "--sets-dir", str(sets_dir)]) == 0
        assert (sets_dir / "xxvi" / "www" / "cards.html").exists()

    def test_uncompiled_set_fails(self, sets_dir: Path) -> None:
        assert render_set.main(["xxvi", "--sets-dir", str(sets_dir)]) == 1

    def test_missing_argument(self, sets_dir: Path) -> None:
        assert render_set.main(["--sets-dir", str(sets_dir)]) == 1


class TestDiscoverSets:
    def test_only_directories_with_csv(self, sets_dir: Path) -> None:
        (sets_dir / "no-csv").mkdir()
        (sets_dir / "aaa").mkdir()
        (sets_dir / "aaa" / "cards.csv").write_text("h1,h2,h3,h4,h5,h6\n")
        (sets_dir / "stray.csv").write_text("")

        assert build_all.discover_sets(sets_dir) == ["aaa", "xxvi"]

    def test_missing_sets_dir(self, tmp_path: Path) -> None:
        assert build_all.discover_sets(tmp_path / "missing") == []


class TestBuildAll:
    def test_builds_every_set(self, sets_dir: Path) -> None:
        (sets_dir / "aaa").mkdir()
        (sets_dir / "aaa" / "cards.csv").write_text("h1,h2,h3,h4,h5,h6\n")

        summary = build_all.run_build(sets_dir)

        assert summary.ok
        assert summary.succeeded == ["aaa", "xxvi"]
        assert (sets_dir / "aaa" / "www" / "cards.html").exists()
        assert (sets_dir / "xxvi" / "www" / "checklist.html").exists()

    def test_compile_failure_skips_render(self, sets_dir: Path) -> None:
        with (
            patch(
                "setforge.jobs.build_all.run_compile",
                side_effect=SetNotFoundError("gone"),
            ),
            patch("setforge.jobs.build_all.run_render") as mock_render,
        ):
            summary = build_all.run_build(sets_dir)

        assert not summary.ok
        assert summary.failures[0].set_name == "xxvi"
        assert summary.failures[0].step == "compile"
        mock_render.assert_not_called()

    def test_render_failure_recorded(self, sets_dir: Path) -> None:
        with patch(
            "setforge.jobs.build_all.run_render",
            side_effect=CatalogNotFoundError("missing"),
        ):
            summary = build_all.run_build(sets_dir)

        assert summary.failures[0].step == "render"
        assert summary.failures[0].error == "missing"
        assert summary.succeeded == []

    def test_failures_continue_to_next_set(self, sets_dir: Path) -> None:
        (sets_dir / "aaa").mkdir()
        (sets_dir / "aaa" / "cards.csv").write_text("h1,h2,h3,h4,h5,h6\n")
        real_compile = build_all.run_compile

        def flaky_compile(set_name: str, root: Path):
            if set_name == "aaa":
                raise SetNotFoundError("boom")
            return real_compile(set_name, root)

        with patch("setforge.jobs.build_all.run_compile", side_effect=flaky_compile):
            summary = build_all.run_build(sets_dir)

        assert [failure.set_name for failure in summary.failures] == ["aaa"]
        assert summary.succeeded == ["xxvi"]

    def test_unexpected_compile_error_recorded(self, sets_dir: Path) -> None:
        (sets_dir / "aaa").mkdir()
        (sets_dir / "aaa" / "cards.csv").write_text("h1,h2,h3,h4,h5,h6\n")
        real_compile = build_all.run_compile

        def failing_compile(set_name: str, root: Path):
            if set_name == "aaa":
                raise UnicodeDecodeError("utf-8", b"\xe9", 0, 1, "invalid continuation byte")
            return real_compile(set_name, root)

        with patch("setforge.jobs.build_all.run_compile", side_effect=failing_compile):
            summary = build_all.run_build(sets_dir)

        assert [(f.set_name, f.step) for f in summary.failures] == [("aaa", "compile")]
        assert "invalid continuation byte" in summary.failures[0].error
        assert summary.succeeded == ["xxvi"]

    def test_corrupt_catalog_recorded_as_render_failure(self, sets_dir: Path) -> None:
        def corrupt_compile(set_name: str, root: Path):
            (root / set_name / "output.json").write_text("{not json")

        with patch("setforge.jobs.build_all.run_compile", side_effect=corrupt_compile):
            summary = build_all.run_build(sets_dir)

        assert [(f.set_name, f.step) for f in summary.failures] == [("xxvi", "render")]
        assert summary.succeeded == []

    def test_undecodable_csv_still_builds(self, sets_dir: Path) -> None:
        (sets_dir / "aaa").mkdir()
        (sets_dir / "aaa" / "cards.csv").write_bytes(
            b"Product Name,Printing,Condition,Rarity,Number,Market Price\n"
            b"Caf\xe9 Guard,Normal,Near Mint,Common,26-002C,$1.00\n"
        )

        summary = build_all.run_build(sets_dir)

        assert summary.ok
        assert summary.succeeded == ["aaa", "xxvi"]

    def test_main_exit_codes(self, sets_dir: Path, tmp_path: Path) -> None:
        assert build_all.main(["--sets-dir", str(sets_dir)]) == 0
        assert build_all.main(["--sets-dir", str(tmp_path / "empty")]) == 1

        with patch(
            "setforge.jobs.build_all.run_render",
            side_effect=CatalogNotFoundError("missing"),
        ):
            assert build_all.main(["--sets-dir", str(sets_dir)]) == 1
