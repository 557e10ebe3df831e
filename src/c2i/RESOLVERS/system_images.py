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
Flattening of static system image collections.
"""
import logging
from typing import Any, Dict, List
from pydantic_core import PydanticSerializationError, to_jsonable_python
from ..MODELS.chart_version import OSType
from ..MODELS.image_set import ImageSet
from ..MODELS.system_images import TOOLS_SYSTEM_IMAGES
from ..exceptions import CollectionError

logger = logging.getLogger(__name__)

SYSTEM_SOURCE = "system"


def _to_object(collection: Any) -> Dict[str, Any]:
    try:
        obj = to_jsonable_python(collection, by_alias=True)
    except PydanticSerializationError as e:
        raise CollectionError(f"cannot convert {type(collection).__name__} to a mapping: {e}") from e
    if not isinstance(obj, dict):
        raise CollectionError(f"cannot convert {type(collection).__name__} to a mapping")
    return obj


def fetch_images_from_collection(obj: Dict[str, Any]) -> List[str]:
    """
    Collects every string leaf of a mapping, recursing into nested mappings.

    Values of any other type (numbers, lists, None...) are ignored.
    """
    images = []
    for value in obj.values():
        if isinstance(value, str):
            images.append(value)
        elif isinstance(value, dict):
            images.extend(fetch_images_from_collection(value))
    return images


def flat_images_from_collections(*collections: Any) -> List[str]:
    """
    Flattens image collections into a single list of image names.

    :param collections: Pydantic models, mappings or dataclasses whose string
        fields are image names.
    :raises CollectionError: If a collection cannot be converted to a mapping.
    """
    images: List[str] = []
    for collection in collections:
        images.extend(fetch_images_from_collection(_to_object(collection)))
    return images


def fetch_images_from_system(system_images: Any, os_type: OSType, image_set: ImageSet) -> None:
    """
    Adds the images of the system image collections under the ``system`` source.

    The tool images are only part of Linux resolutions.
    """
    collections = [system_images]
    if os_type == OSType.LINUX:
        collections.append(TOOLS_SYSTEM_IMAGES)

    images = flat_images_from_collections(*collections)
    logger.debug("Found %d system images", len(images))
    image_set.add_all(SYSTEM_SOURCE, images)
