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
Unit tests for version range checks.
"""
import pytest
from c2i.RESOLVERS.version_filter import is_version_in_range, min_max_to_constraint, parse_constraint
from c2i.exceptions import VersionConstraintError


class TestMinMaxToConstraint:

    def test_both(self):
        assert min_max_to_constraint("2.5.0", "2.6.0") == "2.5.0 - 2.6.0"

    def test_min_only(self):
        assert min_max_to_constraint("2.5.0", None) == ">= 2.5.0"

    def test_max_only(self):
        assert min_max_to_constraint("", "2.6.0") == "<= 2.6.0"

    def test_neither(self):
        assert min_max_to_constraint(None, None) == ""


class TestIsVersionInRange:

    @pytest.mark.parametrize("version,constraint,expected", [
        ("2.5.0", "2.5.0 - 2.6.0", True),
        ("2.6.0", "2.5.0 - 2.6.0", True),
        ("2.6.1", "2.5.0 - 2.6.0", False),
        ("2.6.3", ">= 2.6.1", True),
        ("2.6.0", ">= 2.6.1", False),
        ("2.4.9", "<= 2.6.0", True),
        ("2.6.3", ">=2.5.0 <=2.6", False),
        ("2.5.5", ">=2.5.0, <2.6", True),
        ("2.3.0", "<2.4 || >=2.6", True),
        ("2.5.0", "<2.4 || >=2.6", False),
        ("v2.6.3", ">= v2.6.1", True),
    ])
    def test_ranges(self, version, constraint, expected):
        assert is_version_in_range(version, constraint) is expected

    def test_prerelease_is_stripped(self):
        assert is_version_in_range("2.5.7-rc1", "2.5.6 - 2.5.8")
        assert is_version_in_range("2.6.0-alpha2", "2.5.0 - 2.6.0")

    def test_empty_constraint(self):
        with pytest.raises(VersionConstraintError):
            is_version_in_range("2.6.3", "")

    def test_invalid_target(self):
        with pytest.raises(VersionConstraintError):
            is_version_in_range("not-a-version", ">= 2.5.0")

    def test_invalid_bound(self):
        with pytest.raises(VersionConstraintError):
            is_version_in_range("2.6.3", ">= banana")

    def test_parse_constraint_alternatives(self):
        assert len(parse_constraint("1.0 - 2.0 || >= 3.0")) == 2

    @pytest.mark.parametrize("version", ["2.6.3-head", "2.6.3-patch1", "2.6.3-alpha.1.x", "2.6.3-rc1+build.5"])
    def test_semver_prerelease_targets(self, version):
        assert is_version_in_range(version, ">= 2.6.0")
        assert is_version_in_range(version, "2.6.0 - 2.6.3")
        assert not is_version_in_range(version, "<= 2.6.2")

    def test_prerelease_bound(self):
        assert is_version_in_range("2.6.0", ">= 2.6.0-rc1")
        assert not is_version_in_range("2.5.9", ">= 2.6.0-rc1")

    def test_partial_versions(self):
        assert is_version_in_range("2.6", ">= 2.5")
        assert is_version_in_range("V2.6.0", "= 2.6")
