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
Static collections of images shipped with the platform tooling.
"""
from pydantic import BaseModel, ConfigDict, Field


class PipelineSystemImages(BaseModel):
    """Images used by the pipeline executors."""
    model_config = ConfigDict(populate_by_name=True)

    jenkins: str = "rancher/pipeline-jenkins-server:v0.1.4"
    jenkins_jnlp: str = Field(default="jenkins/jnlp-slave:3.35-4", alias="jenkinsJnlp")
    alpine_git: str = Field(default="rancher/pipeline-tools:v0.1.16", alias="alpineGit")
    plugins_docker: str = Field(default="plugins/docker:18.09", alias="pluginsDocker")
    minio: str = "minio/minio:RELEASE.2020-07-13T18-09-56Z"
    registry: str = "registry:2"
    registry_proxy: str = Field(default="rancher/pipeline-tools:v0.1.16", alias="registryProxy")
    kube_apply: str = Field(default="rancher/pipeline-tools:v0.1.16", alias="kubeApply")


class AuthSystemImages(BaseModel):
    """Images used by the cluster authentication endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    kube_api_auth: str = Field(default="rancher/kube-api-auth:v0.1.4", alias="kubeAPIAuth")


class ToolsSystemImages(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pipeline_system_images: PipelineSystemImages = Field(
        default_factory=PipelineSystemImages, alias="pipelineSystemImages"
    )
    auth_system_images: AuthSystemImages = Field(
        default_factory=AuthSystemImages, alias="authSystemImages"
    )


TOOLS_SYSTEM_IMAGES = ToolsSystemImages()
