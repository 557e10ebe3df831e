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
Resolution of the full image list of a platform release.
"""
import logging
import os
import yaml
from typing import Any, Callable, Iterable, List, Optional, Tuple
from ..MODELS.chart_version import OSType
from ..MODELS.image_set import ImageSet
from ..REGISTRY.mirror import mirror_image
from ..REGISTRY.private_registry import resolve_with_registry
from ..UTILS.settings import ResolverSettings
from ..exceptions import C2IError, ImageResolutionError
from .chart_selector import get_chart_versions
from .image_extractor import pick_images_from_values_yaml
from .system_images import fetch_images_from_system

logger = logging.getLogger(__name__)

CORE_SOURCE = "core"
RANCHER_SOURCE = "rancher"
K3S_UPGRADE_SOURCE = "k3sUpgrade"

# Errors that abort a stage and are reported with its name
STAGE_ERRORS = (C2IError, OSError, ValueError, yaml.YAMLError)


def fetch_images_from_charts(path: str, target_version: str, os_type: OSType, image_set: ImageSet,
                             ranged: Optional[bool] = None) -> None:
    """
    Adds the images declared in the ``values.yaml`` files of the selected
    chart versions of a repository.

    :param path: Root of the chart repository.
    :param target_version: Platform version used to select chart versions.
    :param os_type: OS family the images are resolved for.
    :param image_set: Accumulator receiving the images.
    :param ranged: Overrides the ranged repository detection.
    """
    chart_versions = get_chart_versions(path, target_version, ranged=ranged)

    def on_error(error: OSError):
        raise error

    for dirpath, dirnames, filenames in os.walk(path, onerror=on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            pick_images_from_values_yaml(image_set, chart_versions, path,
                                         os.path.join(dirpath, filename), os_type)


def set_requirement_images(os_type: OSType, image_set: ImageSet, shell_image: str) -> None:
    """Adds the images every Linux installation needs under the ``core`` source."""
    if os_type == OSType.LINUX:
        image_set.add(shell_image, CORE_SOURCE)
        image_set.add("busybox", CORE_SOURCE)


def get_images(system_chart_path: Optional[str], chart_path: Optional[str], target_version: str,
               k3s_upgrade_images: Iterable[str] = (), images_from_args: Iterable[str] = (),
               system_images: Any = None, os_type: OSType = OSType.LINUX,
               settings: Optional[ResolverSettings] = None,
               mirror: Optional[Callable[[str], str]] = None,
               registry: Optional[str] = None) -> Tuple[List[str], List[str]]:
    """
    Resolves every image needed by a platform release on one OS family.

    Stages run in order and any failure aborts the resolution:

    1. system chart repository
    2. chart repository
    3. system image collections (plus the tool images on Linux)
    4. shell and busybox images on Linux (``core``)
    5. caller supplied images (``rancher`` and ``k3sUpgrade``), on every OS
    6. renaming to the mirrored image names
    7. prefixing with the private registry, when one is given

    :param system_chart_path: System chart repository, skipped when empty.
    :param chart_path: Chart repository, skipped when empty.
    :param target_version: Platform version the images are resolved for.
    :param k3s_upgrade_images: Images needed to upgrade k3s clusters.
    :param images_from_args: Images requested by the caller.
    :param system_images: Static image collections (models or mappings).
    :param os_type: OS family the images are resolved for.
    :param settings: Resolver settings, defaults used when omitted.
    :param mirror: Image name rewrite, :func:`mirror_image` by default.
    :param registry: Private registry the images are pulled from. Names that
        collide once prefixed are merged.
    :return: The sorted image names, and the same images each followed by
        their comma separated sources.
    :raises ImageResolutionError: If a stage fails.
    """
    settings = settings or ResolverSettings()
    mirror = mirror or mirror_image
    image_set = ImageSet()

    if system_chart_path:
        try:
            fetch_images_from_charts(system_chart_path, target_version, os_type, image_set)
        except STAGE_ERRORS as e:
            raise ImageResolutionError("system charts", e) from e

    if chart_path:
        try:
            fetch_images_from_charts(chart_path, target_version, os_type, image_set)
        except STAGE_ERRORS as e:
            raise ImageResolutionError("charts", e) from e

    if system_images:
        try:
            fetch_images_from_system(system_images, os_type, image_set)
        except STAGE_ERRORS as e:
            raise ImageResolutionError("system images", e) from e

    set_requirement_images(os_type, image_set, settings.shell_image)
    image_set.add_all(RANCHER_SOURCE, images_from_args)
    image_set.add_all(K3S_UPGRADE_SOURCE, k3s_upgrade_images)

    image_set.convert_mirrored(mirror)
    if registry:
        image_set.convert_mirrored(lambda image: resolve_with_registry(image, registry))

    logger.info("Resolved %d %s images", len(image_set), os_type.value)
    return image_set.to_lists()
