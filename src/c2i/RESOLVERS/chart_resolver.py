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
Constraint driven image resolution for system chart repositories.

Unlike :mod:`c2i.RESOLVERS.chart_selector`, every chart version is checked
against the range built from its questions file, and versions whose check
fails are skipped instead of aborting the resolution.
"""
import logging
import os
import yaml
from typing import List
from ..MODELS.chart_version import ChartVersion, OSType
from ..MODELS.image_set import ImageSet
from ..PARSERS.chart_index import load_index
from ..PARSERS.yaml_decoder import decode_questions, decode_values, values_files
from ..exceptions import C2IError, ChartIndexError
from .image_extractor import pick_images_from_values_map
from .version_filter import is_version_in_range, min_max_to_constraint

logger = logging.getLogger(__name__)


class SystemCharts:
    """
    Resolves images of the charts in a system chart repository.

    :param target_version: Platform version the charts must support.
    :param repo_path: Root of the chart repository.
    :param os_type: OS family the images are resolved for.
    """

    def __init__(self, target_version: str, repo_path: str, os_type: OSType = OSType.LINUX):
        self.target_version = target_version
        self.repo_path = repo_path
        self.os_type = os_type

    def get_chart_versions_from_index(self) -> List[ChartVersion]:
        """All versions of all charts in the repository."""
        if not self.repo_path:
            raise ChartIndexError("invalid path to system-charts repository")
        versions = []
        for chart_versions in load_index(self.repo_path).values():
            versions.extend(chart_versions)
        return versions

    def filter_func(self, version: ChartVersion) -> bool:
        """
        Checks the target version against the range in the chart's questions file.

        :raises FileNotFoundError: If the version has no questions file.
        :raises VersionConstraintError: If no range is declared or it is invalid.
        """
        questions = decode_questions(os.path.join(self.repo_path, version.dir))
        constraint = min_max_to_constraint(questions.rancher_min_version, questions.rancher_max_version)
        return is_version_in_range(self.target_version, constraint)

    def filter_chart_versions(self, versions: List[ChartVersion]) -> List[ChartVersion]:
        """
        Keeps the versions accepted by :meth:`filter_func`.

        A version whose check raises is logged and left out.
        """
        filtered = []
        for version in versions:
            try:
                keep = self.filter_func(version)
            except (C2IError, OSError, ValueError, yaml.YAMLError) as e:
                logger.info("Skipping %s: %s", version.identity, e)
                continue
            if keep:
                filtered.append(version)
        return filtered

    def pick_images_from_all_values(self, image_set: ImageSet, versions: List[ChartVersion]) -> None:
        """Adds the images of every values file of the given versions."""
        for version in versions:
            for path in values_files(version):
                values = decode_values(path)
                pick_images_from_values_map(image_set, values, version.identity, self.os_type)

    def fetch_images(self, image_set: ImageSet) -> None:
        """
        Adds the images of every chart version compatible with the target version.

        :raises ChartIndexError: If the repository index cannot be loaded.
        :raises OSError, yaml.YAMLError: If a values file cannot be decoded.
        """
        versions = self.get_chart_versions_from_index()
        filtered = self.filter_chart_versions(versions)
        logger.info("%d of %d system chart versions support %s",
                    len(filtered), len(versions), self.target_version)
        self.pick_images_from_all_values(image_set, filtered)
