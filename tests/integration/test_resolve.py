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
End to end tests of image resolution over chart repositories on disk.
"""
import pytest
from c2i.MODELS.chart_version import OSType
from c2i.RESOLVERS.resolve import get_images
from c2i.UTILS.settings import ResolverSettings
from c2i.exceptions import ImageResolutionError

SETTINGS = ResolverSettings(shell_image="rancher/shell:v0.1.6")


@pytest.fixture
def release(system_repo, make_repo):
    system_repo.add_chart("bundle", "v1", values={"repository": "rancher/old", "tag": "0.9"},
                          questions={"rancher_min_version": "2.5.0", "rancher_max_version": "2.6.0"})
    system_repo.add_chart("bundle", "v2",
                          values={"image": {"repository": "rancher/foo", "tag": "1.0", "os": "linux,windows"},
                                  "agent": {"repository": "rancher/agent", "tag": "1.0"},
                                  "winAgent": {"repository": "rancher/wins", "tag": "1.0", "os": "windows"}},
                          questions={"rancher_min_version": "2.6.1"})
    charts = make_repo("charts")
    charts.add_chart("app", "1.0.0", values={"repository": "docker.io/foo", "tag": "1.0"})
    charts.add_chart("app", "2.0.0", values={"images": [{"repository": "rancher/app", "tag": "2.0.0"},
                                                        {"repository": "docker.io/foo", "tag": "1.0"}]})
    return system_repo.path, charts.path


def resolve(release, os_type, **kwargs):
    system_path, charts_path = release
    return get_images(system_path, charts_path, "2.6.3", os_type=os_type, settings=SETTINGS, **kwargs)


def test_linux_release(release):
    images, with_sources = resolve(release, OSType.LINUX)

    assert images == [
        "busybox",
        "foo:1.0",
        "rancher/agent:1.0",
        "rancher/app:2.0.0",
        "rancher/foo:1.0",
        "rancher/shell:v0.1.6",
    ]
    assert with_sources == [
        "busybox core",
        "foo:1.0 app:2.0.0",
        "rancher/agent:1.0 bundle:v2",
        "rancher/app:2.0.0 app:2.0.0",
        "rancher/foo:1.0 bundle:v2",
        "rancher/shell:v0.1.6 core",
    ]


def test_windows_release(release):
    images, with_sources = resolve(release, OSType.WINDOWS)

    assert images == ["rancher/foo:1.0", "rancher/wins:1.0"]
    assert with_sources == ["rancher/foo:1.0 bundle:v2", "rancher/wins:1.0 bundle:v2"]


def test_os_partitioning(release):
    linux, _ = resolve(release, OSType.LINUX)
    windows, _ = resolve(release, OSType.WINDOWS)

    assert "rancher/wins:1.0" not in linux
    assert "rancher/agent:1.0" not in windows
    assert "rancher/foo:1.0" in linux and "rancher/foo:1.0" in windows


def test_caller_images_on_every_os(release):
    for os_type in OSType:
        images, with_sources = resolve(release, os_type, k3s_upgrade_images=["busybox:1.2"],
                                       images_from_args=["rancher/rancher:v2.6.3", "rancher/foo:1.0"])
        assert "busybox:1.2 k3sUpgrade" in with_sources
        assert "rancher/rancher:v2.6.3 rancher" in with_sources
        assert "rancher/foo:1.0 bundle:v2,rancher" in with_sources


def test_sources_are_unioned(release):
    _, with_sources = resolve(release, OSType.LINUX, images_from_args=["busybox"],
                              k3s_upgrade_images=["busybox", "foo:1.0"])
    assert "busybox core,k3sUpgrade,rancher" in with_sources
    assert "foo:1.0 app:2.0.0,k3sUpgrade" in with_sources


def test_system_images(release):
    system_images = {"v1.20.4-rancher1-1": {"etcd": "rancher/etcd:v3.4.13",
                                            "kubernetes": "docker.io/rancher/hyperkube:v1.20.4"}}

    linux, linux_sources = resolve(release, OSType.LINUX, system_images=system_images)
    windows, _ = resolve(release, OSType.WINDOWS, system_images=system_images)

    assert "rancher/etcd:v3.4.13 system" in linux_sources
    assert "rancher/hyperkube:v1.20.4 system" in linux_sources
    assert "rancher/pipeline-jenkins-server:v0.1.4" in linux
    assert "rancher/etcd:v3.4.13" in windows
    assert "rancher/pipeline-jenkins-server:v0.1.4" not in windows


def test_deterministic(release):
    first = resolve(release, OSType.LINUX, images_from_args=["b:1", "a:1"])
    second = resolve(release, OSType.LINUX, images_from_args=["a:1", "b:1"])
    assert first == second


def test_custom_mirror(release):
    images, _ = resolve(release, OSType.WINDOWS, mirror=lambda image: image.replace("rancher/", "mirror/"))
    assert images == ["mirror/foo:1.0", "mirror/wins:1.0"]


def test_no_repositories():
    images, with_sources = get_images("", None, "2.6.3", settings=SETTINGS)
    assert with_sources == ["busybox core", "rancher/shell:v0.1.6 core"]


def test_stage_errors(release, tmp_path):
    system_path, charts_path = release
    with pytest.raises(ImageResolutionError) as excinfo:
        get_images(str(tmp_path / "missing"), charts_path, "2.6.3")
    assert excinfo.value.stage == "system charts"

    with pytest.raises(ImageResolutionError) as excinfo:
        get_images(system_path, charts_path, "not-a-version")
    assert excinfo.value.stage == "system charts"
    assert "system charts" in str(excinfo.value)

    with pytest.raises(ImageResolutionError) as excinfo:
        get_images(None, str(tmp_path / "missing"), "2.6.3")
    assert excinfo.value.stage == "charts"

    with pytest.raises(ImageResolutionError) as excinfo:
        get_images(None, None, "2.6.3", system_images=["rancher/etcd"])
    assert excinfo.value.stage == "system images"


def test_broken_values_file_aborts(system_repo):
    chart_dir = system_repo.add_chart("broken", "1.0.0", questions={"rancher_min_version": "2.0.0"})
    (chart_dir / "values.yaml").write_text("image: [unclosed\n")

    with pytest.raises(ImageResolutionError):
        get_images(system_repo.path, None, "2.6.3")


def test_registry_prefix_merges_names(release):
    images, with_sources = resolve(release, OSType.LINUX, registry="reg.local",
                                   images_from_args=["rancher/busybox", "reg.local/rancher/foo:1.0"])

    assert images == sorted(images)
    assert len(images) == len(set(images))
    assert "reg.local/rancher/busybox core,rancher" in with_sources
    assert "reg.local/rancher/foo:1.0 app:2.0.0,bundle:v2,rancher" in with_sources
    assert all(image.startswith("reg.local/") for image in images)


def test_prerelease_target_version(release):
    system_path, charts_path = release
    images, _ = get_images(system_path, charts_path, "2.6.3-head", os_type=OSType.WINDOWS, settings=SETTINGS)
    assert images == ["rancher/foo:1.0", "rancher/wins:1.0"]
