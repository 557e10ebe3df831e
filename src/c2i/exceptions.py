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
Exceptions raised while resolving images.
"""
from typing import Optional


class C2IError(Exception):
    """Base class for all resolver errors."""


class ChartIndexError(C2IError):
    """A chart repository index could not be read or is malformed."""


class VersionConstraintError(C2IError, ValueError):
    """A version or version constraint string could not be parsed or evaluated."""


class CollectionError(C2IError):
    """A static image collection could not be converted to a mapping."""


class ImageResolutionError(C2IError):
    """
    A fatal error in one stage of image resolution.

    :param stage: Name of the stage that failed (e.g. "system charts").
    :param cause: The underlying exception, if any.
    """

    def __init__(self, stage: str, cause: Optional[BaseException] = None):
        self.stage = stage
        self.cause = cause
        message = f"failed to fetch images from {stage}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
