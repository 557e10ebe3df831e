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
Accumulator mapping image names to the set of sources that require them.
"""
from typing import Callable, Dict, Iterable, List, Tuple


class ImageSet:
    """
    Mapping of image name -> {source label: True}.

    Entries are only ever added. The single exception is
    :meth:`convert_mirrored`, which moves every source of an image onto its
    mirrored name and drops the old key.
    """

    def __init__(self):
        self.images: Dict[str, Dict[str, bool]] = {}

    def add(self, image: str, *sources: str) -> None:
        """
        Records ``image`` as required by each of ``sources``.

        Adding the same image and source again has no effect.
        """
        entry = self.images.setdefault(image, {})
        for source in sources:
            entry[source] = True

    def add_all(self, source: str, images: Iterable[str]) -> None:
        """Records every image in ``images`` under a single source label."""
        for image in images:
            self.add(image, source)

    def merge(self, other: "ImageSet") -> None:
        """Unions the entries of another accumulator into this one."""
        for image, sources in other.images.items():
            self.add(image, *[s for s, present in sources.items() if present])

    def sources(self, image: str) -> List[str]:
        """Sorted source labels currently attached to ``image``."""
        return sorted(s for s, present in self.images.get(image, {}).items() if present)

    def convert_mirrored(self, mirror: Callable[[str], str]) -> None:
        """
        Renames every image to ``mirror(image)``.

        When the mirrored name differs, all present sources move to the new
        name and the old key is removed. Iterates over a snapshot of the keys,
        so newly inserted names are not revisited in the same pass.
        """
        for image in list(self.images):
            converted = mirror(image)
            if converted == image:
                continue
            for source, present in self.images[image].items():
                if present:
                    self.add(converted, source)
            del self.images[image]

    def to_lists(self) -> Tuple[List[str], List[str]]:
        """
        Materializes the final outputs.

        :return: The sorted image names, and for each of them (same order) the
            line ``"<image> <source>,<source>..."``.
        """
        images = sorted(self.images)
        with_sources = [f"{image} {','.join(self.sources(image))}" for image in images]
        return images, with_sources

    def __contains__(self, image: str) -> bool:
        return image in self.images

    def __len__(self) -> int:
        return len(self.images)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ImageSet):
            return NotImplemented
        return self.images == other.images

    def __repr__(self) -> str:
        return f"ImageSet({self.images!r})"
