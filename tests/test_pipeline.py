import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from llmdocs.config import Config
from llmdocs.pipeline import OutputConflictError, run_pipeline

FIRST_RUN = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
SECOND_RUN = datetime(2024, 6, 2, 8, 30, tzinfo=timezone.utc)


def _write(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")


def _project(tmp_path: Path) -> Config:
    source = tmp_path / "docs"
    _write(source / "a.mdx", "---\ntitle: A\n---\n# A\nShort text.")
    _write(source / "sub" / "b.mdx", "# B\n" + " ".join(["word"] * 55))
    return Config(
        project_name="Docs",
        source_dir=source,
        output_dir=tmp_path / "public" / "llms.txt",
        max_chunk_tokens=40,
        version_label="0.0.5",
    )


def _bodies(root: Path) -> dict[str, str]:
    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in root.rglob("*.txt")
    }


def test_manifest_lists_exactly_the_generated_files(tmp_path: Path) -> None:
    config = _project(tmp_path)

    result = run_pipeline(config, generated_at=FIRST_RUN)

    assert set(result.index.paths) == {"a.txt", "sub/b.1.txt", "sub/b.2.txt"}
    index_text = result.index_path.read_text(encoding="utf-8")
    assert result.index_path == config.output_dir / "index.txt"
    assert index_text.startswith("# Docs Index\nGenerated: 2024-05-01T12:00:00.000Z\n")
    lines = index_text.split("\n")
    for path in ("a.txt", "sub/b.1.txt", "sub/b.2.txt"):
        assert lines.count(f"- /llms.txt/{path}") == 1
    assert "- /llms.txt/index.txt" not in lines


def test_one_timestamp_is_shared_by_every_artifact(tmp_path: Path) -> None:
    config = _project(tmp_path)

    result = run_pipeline(config, generated_at=FIRST_RUN)

    stamp = "Generated: 2024-05-01T12:00:00.000Z"
    for body in _bodies(config.output_dir).values():
        assert stamp in body
    report = json.loads(result.report_path.read_text(encoding="utf-8"))
    assert report["generated_at"].startswith("2024-05-01T12:00:00")


def test_rebuild_is_destructive_and_idempotent_apart_from_timestamp(tmp_path: Path) -> None:
    config = _project(tmp_path)
    stale = config.output_dir / "old" / "stale.txt"
    _write(stale, "left over from a previous run")

    run_pipeline(config, generated_at=FIRST_RUN)
    first = _bodies(config.output_dir)
    run_pipeline(config, generated_at=SECOND_RUN)
    second = _bodies(config.output_dir)

    assert not stale.exists()
    assert not (config.output_dir / "old").exists()
    assert set(first) == set(second)
    for name in first:
        assert first[name].replace("2024-05-01T12:00:00.000Z", "") == second[name].replace(
            "2024-06-02T08:30:00.000Z", ""
        )


def test_report_summarizes_documents(tmp_path: Path) -> None:
    config = _project(tmp_path)

    result = run_pipeline(config, generated_at=FIRST_RUN)

    assert result.report_path == config.output_dir / "build-report.json"
    data = json.loads(result.report_path.read_text(encoding="utf-8"))
    assert data["project"] == "Docs"
    assert data["document_count"] == 2
    assert data["file_count"] == 3
    assert data["index_entries"] == 3
    assert [doc["source"] for doc in data["documents"]] == ["a.mdx", "sub/b.mdx"]
    assert data["documents"][1]["chunks"] == 2


def test_report_can_be_disabled(tmp_path: Path) -> None:
    config = _project(tmp_path)
    config.report_filename = None

    result = run_pipeline(config, generated_at=FIRST_RUN)

    assert result.report_path is None
    assert not (config.output_dir / "build-report.json").exists()


def test_version_label_defaults_to_package_version(tmp_path: Path) -> None:
    from llmdocs import __version__

    config = _project(tmp_path)
    config.version_label = None

    run_pipeline(config, generated_at=FIRST_RUN)

    body = (config.output_dir / "a.txt").read_text(encoding="utf-8")
    assert f"Version: {__version__}\n" in body


def test_missing_source_fails_before_output_is_deleted(tmp_path: Path) -> None:
    config = Config(source_dir=tmp_path / "missing", output_dir=tmp_path / "out")
    keep = tmp_path / "out" / "keep.txt"
    _write(keep, "previous output")

    with pytest.raises(FileNotFoundError):
        run_pipeline(config)

    assert keep.exists()


def test_output_containing_sources_is_rejected(tmp_path: Path) -> None:
    source = tmp_path / "site" / "docs"
    _write(source / "a.mdx", "Body")
    config = Config(source_dir=source, output_dir=tmp_path / "site")

    with pytest.raises(OutputConflictError):
        run_pipeline(config)

    assert (source / "a.mdx").exists()


def test_document_colliding_with_index_is_rejected_before_writing(tmp_path: Path) -> None:
    source = tmp_path / "docs"
    _write(source / "index.mdx", "Welcome")
    _write(source / "guides" / "a.mdx", "Guide")
    output = tmp_path / "out"
    keep = output / "keep.txt"
    _write(keep, "previous output")
    config = Config(source_dir=source, output_dir=output)

    with pytest.raises(OutputConflictError, match="index.txt"):
        run_pipeline(config)

    assert sorted(path.relative_to(output).as_posix() for path in output.rglob("*")) == ["keep.txt"]


def test_documents_sharing_an_output_name_are_rejected(tmp_path: Path) -> None:
    config = _project(tmp_path)
    _write(config.source_dir / "sub" / "b.1.mdx", "Clashes with the first part of b.mdx")

    with pytest.raises(OutputConflictError, match="sub/b.1.txt"):
        run_pipeline(config)

    assert not config.output_dir.exists()


def test_custom_index_name_and_prefix(tmp_path: Path) -> None:
    source = tmp_path / "docs"
    _write(source / "index.mdx", "Welcome")
    config = Config(
        source_dir=source,
        output_dir=tmp_path / "out",
        index_filename="manifest.txt",
        url_prefix="/llm/",
    )

    result = run_pipeline(config, generated_at=FIRST_RUN)

    assert result.index.paths == ["index.txt"]
    assert "- /llm/index.txt" in (config.output_dir / "manifest.txt").read_text(encoding="utf-8")
