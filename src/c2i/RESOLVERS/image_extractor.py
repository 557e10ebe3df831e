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
Extraction of image references from chart values.

An image is declared by any mapping that carries both ``repository`` and
``tag``. The optional ``os`` field lists the operating systems the image is
used on, comma separated (``windows``, ``linux,windows``...). Without it the
image is Linux only.
"""
import logging
import os
from typing import Any, List, Mapping, Optional, Set
from ..MODELS.chart_version import ChartVersion, OSType
from ..MODELS.image_set import ImageSet
from ..PARSERS.yaml_decoder import decode_values, is_values_file
from ..UTILS.tree_walker import walk_map

logger = logging.getLogger(__name__)


def _format_tag(tag: Any) -> str:
    if isinstance(tag, bool):
        return "true" if tag else "false"
    return str(tag)


def parse_os_list(os_field: Any, image: str = "") -> Set[OSType]:
    """
    Determines the operating systems an image declaration applies to.

    :param os_field: Value of the ``os`` field, None when absent.
    :param image: Image name, used in the diagnostic for invalid values.
    :return: The set of OS families; ``{OSType.LINUX}`` when unspecified.
    """
    if os_field is None:
        return {OSType.LINUX}
    if not isinstance(os_field, str):
        logger.warning("Field 'os:' for image %s contains neither a string nor nil", image)
        return {OSType.LINUX}

    os_types = set()
    for token in os_field.split(","):
        token = token.strip().lower()
        if token == OSType.LINUX.value:
            os_types.add(OSType.LINUX)
        elif token == OSType.WINDOWS.value:
            os_types.add(OSType.WINDOWS)
    return os_types


def generate_images(chart_identity: str, node: Mapping, image_set: ImageSet, os_type: OSType) -> None:
    """
    Adds the image declared by ``node``, if any, when it applies to ``os_type``.

    :param chart_identity: Source label, usually ``name:version`` of the chart.
    :param node: A mapping from a values document.
    :param image_set: Accumulator receiving the image.
    :param os_type: OS family the images are resolved for.
    """
    repository = node.get("repository")
    if not isinstance(repository, str):
        return
    tag = node.get("tag")
    if tag is None:
        return

    image = f"{repository}:{_format_tag(tag)}"
    if os_type in parse_os_list(node.get("os"), image):
        image_set.add(image, chart_identity)


def pick_images_from_values_map(image_set: ImageSet, values: Any, chart_identity: str, os_type: OSType) -> None:
    """Walks a parsed values document and adds every image it declares."""
    walk_map(values, lambda node: generate_images(chart_identity, node, image_set, os_type))


def _owning_chart(rel_path: str, chart_versions: List[ChartVersion]) -> Optional[ChartVersion]:
    for version in chart_versions:
        chart_dir = os.path.normpath(version.dir)
        if chart_dir == os.curdir or rel_path.startswith(chart_dir + os.sep):
            return version
    return None


def pick_images_from_values_yaml(image_set: ImageSet, chart_versions: List[ChartVersion], base_path: str,
                                 path: str, os_type: OSType) -> None:
    """
    Adds the images of one file met while walking a chart repository.

    Only files named ``values.yaml`` inside the directory of a selected chart
    version are read; anything else is skipped.

    :raises OSError: If the file cannot be read.
    :raises yaml.YAMLError: If the file is not a valid values document.
    """
    if not is_values_file(path):
        return
    rel_path = os.path.relpath(path, base_path)
    version = _owning_chart(rel_path, chart_versions)
    if version is None:
        return

    logger.debug("Picking images from %s for %s", rel_path, version.identity)
    pick_images_from_values_map(image_set, decode_values(path), version.identity, os_type)
