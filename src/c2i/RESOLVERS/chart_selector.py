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
Selects which versions of each chart contribute images for a platform version.
"""
import logging
from typing import List, Optional
from ..MODELS.chart_version import ChartVersion
from ..PARSERS.chart_index import load_index
from ..PARSERS.yaml_decoder import fetch_version_questions
from .version_filter import parse_version

logger = logging.getLogger(__name__)

# Repositories under this path declare platform compatibility per chart version
SYSTEM_CHARTS_REPO_DIR = "build/system-charts"


def is_ranged_repository(repo_path: str) -> bool:
    return SYSTEM_CHARTS_REPO_DIR in repo_path.replace("\\", "/")


def versions_in_min_max_range(target_version: str, versions: List[ChartVersion]) -> List[ChartVersion]:
    """
    Keeps the versions of one chart whose questions file accepts ``target_version``.

    A version qualifies when it declares ``rancher_min_version`` <= target and,
    if it also declares ``rancher_max_version``, target <= max. Versions without
    a minimum never qualify. When nothing qualifies the newest version is kept
    so that no chart is dropped entirely.

    :param target_version: Platform version to check.
    :param versions: Versions of a single chart, newest first.
    :raises VersionConstraintError: If the target or a declared bound is invalid.
    :raises OSError, yaml.YAMLError: If a questions file cannot be read.
    """
    selected = []
    for version in versions:
        questions = fetch_version_questions(version)
        if not questions.rancher_min_version:
            continue
        target = parse_version(target_version, "platform version")
        minimum = parse_version(questions.rancher_min_version, "rancher_min_version")
        if target < minimum:
            continue
        if questions.rancher_max_version:
            maximum = parse_version(questions.rancher_max_version, "rancher_max_version")
            if target > maximum:
                continue
        selected.append(version)

    if not selected and versions:
        logger.debug("No version of %s matches %s, keeping %s",
                     versions[0].name, target_version, versions[0].version)
        selected.append(versions[0])
    return selected


def get_chart_versions(repo_path: str, target_version: str, ranged: Optional[bool] = None) -> List[ChartVersion]:
    """
    Lists the chart versions of a repository that images are picked from.

    Ranged repositories (see :func:`is_ranged_repository`) keep every version
    compatible with ``target_version``; plain repositories keep only the newest
    version of each chart.

    :param repo_path: Root of the chart repository.
    :param target_version: Platform version the images are resolved for.
    :param ranged: Overrides the path based repository detection.
    :return: Selected versions of all charts.
    """
    if ranged is None:
        ranged = is_ranged_repository(repo_path)

    selected: List[ChartVersion] = []
    for name, versions in load_index(repo_path).items():
        if not versions:
            continue
        if ranged:
            selected.extend(versions_in_min_max_range(target_version, versions))
        else:
            # Versions are sorted newest first
            selected.append(versions[0])

    logger.info("Selected %d chart versions from %s", len(selected), repo_path)
    return selected
