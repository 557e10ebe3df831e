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
Models for chart versions, their compatibility metadata and target operating systems.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class OSType(str, Enum):
    """
    Operating system family a resolution run computes images for.
    """
    LINUX = "linux"
    WINDOWS = "windows"


class Questions(BaseModel):
    """
    Compatibility metadata read from a chart's questions file.
    """
    model_config = ConfigDict(extra="ignore")

    rancher_min_version: Optional[str] = None
    rancher_max_version: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.rancher_min_version and not self.rancher_max_version


class ChartVersion(BaseModel):
    """
    A single version of a chart found in a chart repository.
    """
    name: str
    version: str
    # Directory of this version relative to the repository root
    dir: str
    local_files: List[str] = Field(default_factory=list)

    @property
    def identity(self) -> str:
        """Source label for images contributed by this chart version."""
        return f"{self.name}:{self.version}"
