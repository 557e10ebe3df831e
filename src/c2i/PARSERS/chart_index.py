# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Builds a virtual index of the charts found in a local chart repository.

A chart version is any directory holding a ``Chart.yaml``. Its name and
version come from that file, and every file below the directory (sub-charts
included) belongs to it.
"""
import logging
import os
import yaml
from typing import Dict, List
from ..MODELS.chart_version import ChartVersion
from ..UTILS.versions import to_semver
from ..exceptions import ChartIndexError

logger = logging.getLogger(__name__)

CHART_FILES = ("Chart.yaml", "Chart.yml")


def _version_sort_key(version: str):
    # Unparseable versions sort below every valid one
    try:
        return (1, to_semver(version), version)
    except (TypeError, ValueError):
        return (0, version, version)


def _list_files(root: str) -> List[str]:
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            files.append(os.path.abspath(os.path.join(dirpath, filename)))
    return files


def _read_chart(repo_path: str, chart_dir: str, chart_file: str) -> ChartVersion:
    path = os.path.join(chart_dir, chart_file)
    try:
        with open(path, 'r') as f:
            metadata = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ChartIndexError(f"failed to read {path}: {e}") from e

    if not isinstance(metadata, dict):
        raise ChartIndexError(f"{path} is not a mapping")
    name = metadata.get("name")
    version = metadata.get("version")
    if not name or version is None:
        raise ChartIndexError(f"{path} must declare a name and a version")

    return ChartVersion(
        name=str(name),
        version=str(version),
        dir=os.path.relpath(chart_dir, repo_path),
        local_files=_list_files(chart_dir),
    )


def load_index(repo_path: str) -> Dict[str, List[ChartVersion]]:
    """
    Loads the chart index of a repository.

    :param repo_path: Root directory of the chart repository.
    :return: Chart name -> versions, newest first.
    :raises ChartIndexError: If the path is not a directory or a chart file
        is unreadable or malformed.
    """
    if not repo_path or not os.path.isdir(repo_path):
        raise ChartIndexError(f"invalid path to chart repository: {repo_path!r}")

    index: Dict[str, List[ChartVersion]] = {}
    for dirpath, dirnames, filenames in os.walk(repo_path):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith('.'))
        chart_file = next((name for name in CHART_FILES if name in filenames), None)
        if chart_file is None:
            continue
        chart = _read_chart(repo_path, dirpath, chart_file)
        index.setdefault(chart.name, []).append(chart)
        # Everything below belongs to this chart version
        dirnames[:] = []

    for versions in index.values():
        versions.sort(key=lambda v: _version_sort_key(v.version), reverse=True)

    logger.debug("Loaded %d charts from %s", len(index), repo_path)
    return index
