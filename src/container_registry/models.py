"""
Response models for the Container Registry API.

These Pydantic models give typed access to decoded response bodies. The
service returns raw JSON in DetailedResponse.result; callers that want
attribute access validate it explicitly:

    images = [RemoteAPIImage.model_validate(i) for i in response.result]

Field names are snake_case; the API's wire names are kept as aliases so
both spellings are accepted on input and model_dump(by_alias=True)
reproduces the wire form. Unknown fields are preserved.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class AccountSettings(_ApiModel):
    """Account settings for the targeted IBM Cloud account."""
    platform_metrics: Optional[bool] = Field(default=None, description="Opt in to IBM Cloud Monitoring platform metrics")


class AuthOptions(_ApiModel):
    """The authorization options for the targeted IBM Cloud account."""
    iam_authz: Optional[bool] = Field(default=None, description="Enable role based authorization with IAM")
    private_only: Optional[bool] = Field(default=None, description="Restrict push/pull to private connections")


class HealthConfig(_ApiModel):
    interval: Optional[int] = Field(default=None, alias="Interval")
    retries: Optional[int] = Field(default=None, alias="Retries")
    test: Optional[List[str]] = Field(default=None, alias="Test")
    timeout: Optional[int] = Field(default=None, alias="Timeout")


class Config(_ApiModel):
    """Container configuration embedded in an image inspection."""
    args_escaped: Optional[bool] = Field(default=None, alias="ArgsEscaped")
    attach_stderr: Optional[bool] = Field(default=None, alias="AttachStderr")
    attach_stdin: Optional[bool] = Field(default=None, alias="AttachStdin")
    attach_stdout: Optional[bool] = Field(default=None, alias="AttachStdout")
    cmd: Optional[List[str]] = Field(default=None, alias="Cmd")
    domainname: Optional[str] = Field(default=None, alias="Domainname")
    entrypoint: Optional[List[str]] = Field(default=None, alias="Entrypoint")
    env: Optional[List[str]] = Field(default=None, alias="Env")
    exposed_ports: Optional[Dict[str, Any]] = Field(default=None, alias="ExposedPorts")
    healthcheck: Optional[HealthConfig] = Field(default=None, alias="Healthcheck")
    hostname: Optional[str] = Field(default=None, alias="Hostname")
    image: Optional[str] = Field(default=None, alias="Image")
    labels: Optional[Dict[str, Any]] = Field(default=None, alias="Labels")
    mac_address: Optional[str] = Field(default=None, alias="MacAddress")
    network_disabled: Optional[bool] = Field(default=None, alias="NetworkDisabled")
    on_build: Optional[List[str]] = Field(default=None, alias="OnBuild")
    open_stdin: Optional[bool] = Field(default=None, alias="OpenStdin")
    shell: Optional[List[str]] = Field(default=None, alias="Shell")
    stdin_once: Optional[bool] = Field(default=None, alias="StdinOnce")
    stop_signal: Optional[str] = Field(default=None, alias="StopSignal")
    stop_timeout: Optional[int] = Field(default=None, alias="StopTimeout")
    tty: Optional[bool] = Field(default=None, alias="Tty")
    user: Optional[str] = Field(default=None, alias="User")
    volumes: Optional[Dict[str, Any]] = Field(default=None, alias="Volumes")
    working_dir: Optional[str] = Field(default=None, alias="WorkingDir")


class ImageBulkDeleteError(_ApiModel):
    code: Optional[str] = None
    message: Optional[str] = None


class ImageBulkDeleteResult(_ApiModel):
    """
    Per-digest outcome of a bulk delete.

    The server reports partial failure inside a 2xx body: digests that were
    removed are listed in success, the rest map to an error in error.
    """
    error: Optional[Dict[str, ImageBulkDeleteError]] = None
    success: Optional[List[str]] = None


class ImageDeleteResult(_ApiModel):
    untagged: Optional[str] = Field(default=None, alias="Untagged")


class ImageDigest(_ApiModel):
    """Image digest with the tags that reference it, per repository."""
    created: Optional[int] = None
    id: Optional[str] = None
    manifest_type: Optional[str] = Field(default=None, alias="manifestType")
    repo_tags: Optional[Dict[str, Any]] = Field(default=None, alias="repoTags")
    size: Optional[int] = None


class RootFS(_ApiModel):
    base_layer: Optional[str] = Field(default=None, alias="BaseLayer")
    layers: Optional[List[str]] = Field(default=None, alias="Layers")
    type: Optional[str] = Field(default=None, alias="Type")


class ImageInspection(_ApiModel):
    """Docker-style inspection of an image."""
    architecture: Optional[str] = Field(default=None, alias="Architecture")
    author: Optional[str] = Field(default=None, alias="Author")
    comment: Optional[str] = Field(default=None, alias="Comment")
    config: Optional[Config] = Field(default=None, alias="Config")
    container: Optional[str] = Field(default=None, alias="Container")
    container_config: Optional[Config] = Field(default=None, alias="ContainerConfig")
    created: Optional[str] = Field(default=None, alias="Created")
    docker_version: Optional[str] = Field(default=None, alias="DockerVersion")
    id: Optional[str] = Field(default=None, alias="Id")
    manifest_type: Optional[str] = Field(default=None, alias="ManifestType")
    os: Optional[str] = Field(default=None, alias="Os")
    os_version: Optional[str] = Field(default=None, alias="OsVersion")
    parent: Optional[str] = Field(default=None, alias="Parent")
    root_fs: Optional[RootFS] = Field(default=None, alias="RootFS")
    size: Optional[int] = Field(default=None, alias="Size")
    virtual_size: Optional[int] = Field(default=None, alias="VirtualSize")


class Namespace(_ApiModel):
    namespace: Optional[str] = None


class NamespaceDetails(_ApiModel):
    """Details of a namespace, including its resource group."""
    account: Optional[str] = None
    created_date: Optional[str] = None
    crn: Optional[str] = None
    name: Optional[str] = None
    resource_created_date: Optional[str] = None
    resource_group: Optional[str] = None
    updated_date: Optional[str] = None


class Plan(_ApiModel):
    plan: Optional[str] = None


class QuotaDetails(_ApiModel):
    storage_bytes: Optional[int] = None
    traffic_bytes: Optional[int] = None


class Quota(_ApiModel):
    """Current usage and limits for the targeted account."""
    limit: Optional[QuotaDetails] = None
    usage: Optional[QuotaDetails] = None


class RemoteAPIImage(_ApiModel):
    """An image as returned by the image listing."""
    configuration_issue_count: Optional[int] = Field(default=None, alias="ConfigurationIssueCount")
    created: Optional[int] = Field(default=None, alias="Created")
    digest_tags: Optional[Dict[str, List[str]]] = Field(default=None, alias="DigestTags")
    exempt_issue_count: Optional[int] = Field(default=None, alias="ExemptIssueCount")
    id: Optional[str] = Field(default=None, alias="Id")
    issue_count: Optional[int] = Field(default=None, alias="IssueCount")
    labels: Optional[Dict[str, Any]] = Field(default=None, alias="Labels")
    manifest_type: Optional[str] = Field(default=None, alias="ManifestType")
    parent_id: Optional[str] = Field(default=None, alias="ParentId")
    repo_digests: Optional[List[str]] = Field(default=None, alias="RepoDigests")
    repo_tags: Optional[List[str]] = Field(default=None, alias="RepoTags")
    size: Optional[int] = Field(default=None, alias="Size")
    virtual_size: Optional[int] = Field(default=None, alias="VirtualSize")
    vulnerability_count: Optional[int] = Field(default=None, alias="VulnerabilityCount")
    vulnerable: Optional[str] = Field(default=None, alias="Vulnerable")


class RestoreResult(_ApiModel):
    successful: Optional[List[str]] = None
    unsuccessful: Optional[List[str]] = None


class RetentionPolicy(_ApiModel):
    """
    Retention policy for a namespace.

    images_per_repo of -1 means unlimited; retain_untagged keeps images
    without tags out of the count.
    """
    images_per_repo: Optional[int] = None
    namespace: str
    retain_untagged: Optional[bool] = None


class Trash(_ApiModel):
    """A trashed image: remaining days before purge and its former tags."""
    days_until_expiry: Optional[int] = Field(default=None, alias="daysUntilExpiry")
    tags: Optional[List[str]] = None


class VAReport(_ApiModel):
    configuration_issue_count: Optional[int] = Field(default=None, alias="configurationIssueCount")
    exempt_issue_count: Optional[int] = Field(default=None, alias="exemptIssueCount")
    issue_count: Optional[int] = Field(default=None, alias="issueCount")
    vulnerability_count: Optional[int] = Field(default=None, alias="vulnerabilityCount")
    vulnerable: Optional[str] = None


__all__ = [
    "AccountSettings",
    "AuthOptions",
    "Config",
    "HealthConfig",
    "ImageBulkDeleteError",
    "ImageBulkDeleteResult",
    "ImageDeleteResult",
    "ImageDigest",
    "ImageInspection",
    "Namespace",
    "NamespaceDetails",
    "Plan",
    "Quota",
    "QuotaDetails",
    "RemoteAPIImage",
    "RestoreResult",
    "RetentionPolicy",
    "RootFS",
    "Trash",
    "VAReport",
]
