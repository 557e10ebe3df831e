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
Checks a platform version against the compatibility range declared by a chart.

Constraint strings use the range syntax found in chart metadata:

    ``2.5.0 - 2.6.0``     inclusive range
    ``>= 2.5.0``          lower bound
    ``>=2.5.0 <=2.6``     clauses separated by spaces or commas are all required
    ``<2.4 || >=2.6``     alternatives

Versions follow semantic versioning and are parsed with ``semver``.
"""
import operator
import re
from typing import List, Optional, Tuple
import semver
from ..UTILS.versions import to_semver
from ..exceptions import VersionConstraintError

_HYPHEN_RANGE = re.compile(r'^\s*(\S+)\s+-\s+(\S+)\s*$')
_CLAUSE = re.compile(r'(>=|<=|!=|==|=|>|<)?\s*([^\s,<>=!|]+)')

_OPERATORS = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "==": operator.eq,
    "=": operator.eq,
    "!=": operator.ne,
}

Clause = Tuple[str, semver.Version]


def parse_version(value: str, what: str = "version") -> semver.Version:
    """
    Parses a semantic version string.

    :raises VersionConstraintError: If the string is not a valid version.
    """
    try:
        return to_semver(value)
    except (TypeError, ValueError) as e:
        raise VersionConstraintError(f"invalid {what}: {value!r}") from e


def strip_prerelease(version: semver.Version) -> semver.Version:
    """Returns the release a version is built on, e.g. ``2.5.7-rc1`` -> ``2.5.7``."""
    return version.replace(prerelease=None, build=None)


def min_max_to_constraint(min_version: Optional[str], max_version: Optional[str]) -> str:
    """
    Converts min/max bounds to a constraint string.

    :return: ``"min - max"``, ``">= min"``, ``"<= max"`` or ``""`` when
        neither bound is set.
    """
    if min_version and max_version:
        return f"{min_version} - {max_version}"
    if min_version:
        return f">= {min_version}"
    if max_version:
        return f"<= {max_version}"
    return ""


def _clause(op: Optional[str], version: str) -> Clause:
    return (op or "==", parse_version(version, "constraint bound"))


def parse_constraint(constraint: str) -> List[List[Clause]]:
    """
    Parses a constraint string into alternatives, any of which may match.
    Each alternative is a list of ``(operator, version)`` clauses that must
    all hold.

    :raises VersionConstraintError: If the constraint is empty or malformed.
    """
    if not constraint or not constraint.strip():
        raise VersionConstraintError(f'Invalid constraint string: "{constraint}"')

    alternatives = []
    for alternative in constraint.split("||"):
        match = _HYPHEN_RANGE.match(alternative)
        if match:
            clauses = [_clause(">=", match.group(1)), _clause("<=", match.group(2))]
        else:
            clauses = [_clause(op, ver) for op, ver in _CLAUSE.findall(alternative)]
        if not clauses:
            raise VersionConstraintError(f'Invalid constraint string: "{constraint}"')
        alternatives.append(clauses)
    return alternatives


def is_version_in_range(target_version: str, constraint: str) -> bool:
    """
    Checks whether a platform version satisfies a constraint.

    The target's pre-release is dropped first, so ``2.5.7-rc1`` is checked as
    ``2.5.7``.

    :raises VersionConstraintError: If the constraint is empty, or the target
        or any bound cannot be parsed.
    """
    alternatives = parse_constraint(constraint)
    target = strip_prerelease(parse_version(target_version, "platform version"))
    return any(all(_OPERATORS[op](target, bound) for op, bound in clauses) for clauses in alternatives)
