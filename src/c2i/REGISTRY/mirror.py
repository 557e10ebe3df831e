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
Canonical names of images mirrored into the ``rancher`` namespace.

Several upstream images are published under ``rancher/`` so that a single
namespace has to be mirrored to private registries. The rewrite is a prefix
substitution: the first matching rule applies and the result is never
rewritten again, which keeps :func:`mirror_image` idempotent.
"""
from typing import Sequence, Tuple

# Images that are never renamed
EXEMPT_PREFIXES: Tuple[str, ...] = ("weaveworks", "noiro")

# Registry prefixes dropped before the rewrite rules run
DEFAULT_REGISTRY_PREFIXES: Tuple[str, ...] = ("docker.io/library/", "docker.io/")

MIRROR_RULES: Tuple[Tuple[str, str], ...] = (
    ("gcr.io/google_containers/", "rancher/"),
    ("k8s.gcr.io/defaultbackend", "rancher/nginx-ingress-controller-defaultbackend"),
    ("k8s.gcr.io/k8s-dns-node-cache", "rancher/k8s-dns-node-cache"),
    ("quay.io/coreos/", "rancher/coreos-"),
    ("quay.io/calico/", "rancher/calico-"),
    ("quay.io/pires/", "rancher/"),
    ("plugins/docker", "rancher/plugins-docker"),
    ("kibana", "rancher/kibana"),
    ("jenkins/", "rancher/jenkins-"),
    ("alpine/git", "rancher/alpine-git"),
    ("prom/", "rancher/prom-"),
    ("coredns/", "rancher/coredns-"),
    ("minio/", "rancher/minio-"),
)


class MirrorRule:
    """
    A configurable image name rewrite.

    :param rules: ``(prefix, replacement)`` pairs tried in order.
    :param exempt: Prefixes of images left untouched.
    :param strip: Registry prefixes removed before the rules are tried.
    """

    def __init__(self, rules: Sequence[Tuple[str, str]] = MIRROR_RULES,
                 exempt: Sequence[str] = EXEMPT_PREFIXES,
                 strip: Sequence[str] = DEFAULT_REGISTRY_PREFIXES):
        self.rules = tuple(rules)
        self.exempt = tuple(exempt)
        self.strip = tuple(p for p in strip if p)

    def __call__(self, image: str) -> str:
        stripped = True
        while stripped:
            stripped = False
            for prefix in self.strip:
                if image.startswith(prefix):
                    image = image[len(prefix):]
                    stripped = True
                    break
        if image.startswith(self.exempt):
            return image
        for prefix, replacement in self.rules:
            if image.startswith(prefix):
                return replacement + image[len(prefix):]
        return image


mirror_image = MirrorRule()
