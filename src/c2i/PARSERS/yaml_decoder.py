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
YAML decoding helpers for chart values and questions files.
"""
import logging
import os
import yaml
from typing import Any, Dict, List, Optional
from ..MODELS.chart_version import ChartVersion, Questions

QUESTIONS_FILES = ("questions.yaml", "questions.yml")
VALUES_FILE = "values.yaml"

logger = logging.getLogger(__name__)


def decode_yaml(path: str) -> Any:
    """
    Reads and parses a YAML file.

    :param path: Path of the file.
    :return: The parsed document, or None for an empty file.
    :raises OSError: If the file cannot be read.
    :raises yaml.YAMLError: If the content is not valid YAML.
    """
    with open(path, 'r') as f:
        return yaml.safe_load(f)


def decode_values(path: str) -> Dict[Any, Any]:
    """
    Parses a values file. An empty document decodes to an empty mapping.
    """
    values = decode_yaml(path)
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise yaml.YAMLError(f"values file {path} is not a mapping")
    return values


def is_values_file(path: str) -> bool:
    return os.path.basename(path) == VALUES_FILE


def is_questions_file(path: str) -> bool:
    return os.path.basename(path).lower() in QUESTIONS_FILES


def _to_questions(data: Any, path: str) -> Questions:
    if data is None:
        return Questions()
    if not isinstance(data, dict):
        raise yaml.YAMLError(f"questions file {path} is not a mapping")
    fields = {}
    for key in ("rancher_min_version", "rancher_max_version"):
        value = data.get(key)
        # Only string bounds count, anything else means "not declared"
        if isinstance(value, str) and value.strip():
            fields[key] = value.strip()
    return Questions(**fields)


def fetch_version_questions(version: ChartVersion) -> Questions:
    """
    Reads the compatibility metadata from a chart version's local files.

    A missing questions file is not an error: the bounds are simply unset.
    When both spellings are present the last one listed wins.

    :raises yaml.YAMLError: If a questions file is not a YAML mapping.
    """
    questions = Questions()
    for path in version.local_files:
        if is_questions_file(path):
            questions = _to_questions(decode_yaml(path), path)
    return questions


def decode_questions(version_dir: str) -> Questions:
    """
    Reads ``questions.yaml`` (falling back to ``questions.yml``) from a chart
    version directory.

    :raises FileNotFoundError: If neither file exists.
    """
    questions: Optional[Questions] = None
    for name in QUESTIONS_FILES:
        path = os.path.join(version_dir, name)
        if not os.path.isfile(path):
            continue
        questions = _to_questions(decode_yaml(path), path)
        if not questions.is_empty():
            return questions
    if questions is None:
        raise FileNotFoundError(f"No questions file found in {version_dir}")
    logger.info("questions file in %s is empty", version_dir)
    return questions


def values_files(version: ChartVersion) -> List[str]:
    """Local files of a chart version named exactly ``values.yaml``."""
    return [path for path in version.local_files if is_values_file(path)]
