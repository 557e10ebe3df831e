"""
Shared fixtures building chart repositories on disk.
"""
import pytest
import yaml


class ChartRepo:
    """A chart repository laid out as ``charts/<name>/<version>/``."""

    def __init__(self, root):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> str:
        return str(self.root)

    def add_chart(self, name, version, values=None, questions=None, questions_file="questions.yaml",
                  dirname=None, extra_files=None):
        chart_dir = self.root / "charts" / name / (dirname or str(version))
        chart_dir.mkdir(parents=True)
        (chart_dir / "Chart.yaml").write_text(yaml.safe_dump({"name": name, "version": str(version)}))
        if values is not None:
            (chart_dir / "values.yaml").write_text(yaml.safe_dump(values))
        if questions is not None:
            (chart_dir / questions_file).write_text(yaml.safe_dump(questions))
        for rel_path, content in (extra_files or {}).items():
            path = chart_dir / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return chart_dir


@pytest.fixture
def make_repo(tmp_path):
    def _make(subpath="repo"):
        return ChartRepo(tmp_path / subpath)
    return _make


@pytest.fixture
def system_repo(make_repo):
    """An empty repository that selects chart versions by range."""
    return make_repo("build/system-charts")
