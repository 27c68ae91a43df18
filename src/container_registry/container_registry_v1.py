"""
Management interface for IBM Cloud Container Registry (API version 1.1).

ContainerRegistryV1 exposes one coroutine per REST endpoint. Every
operation validates its parameters, routes them into the URL path, the
query string or a JSON body, computes headers, and hands the resulting
RequestDescriptor to the transport. Transport failures propagate unchanged.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .common import get_sdk_headers
from .errors import ValidationError
from .regions import get_service_url_for_region
from .settings import DEFAULT_SERVICE_URL, Settings, authenticator_from_env, create_settings_from_env
from .transport.authenticators import Authenticator
from .transport.base import DetailedResponse, RequestDescriptor, Transport
from .transport.http import HttpxTransport
from .validation import validate_params

logger = logging.getLogger(__name__)

__all__ = ["ContainerRegistryV1"]

_JSON = "application/json"


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset (None) entries."""
    return {k: v for k, v in values.items() if v is not None}


def _merge_headers(*layers: Dict[str, Any]) -> Dict[str, str]:
    """
    Merge header dicts, later layers winning.

    Names compare case-insensitively; the spelling of the winning layer is
    kept. A None value in any layer removes the header.
    """
    merged: Dict[str, Any] = {}
    for layer in layers:
        for name, value in layer.items():
            for existing in [k for k in merged if k.lower() == name.lower()]:
                del merged[existing]
            merged[name] = value
    return {k: str(v) for k, v in merged.items() if v is not None}


class ContainerRegistryV1:
    """
    Client for the IBM Cloud Container Registry management API.

    Every request except get_messages is scoped to the account given at
    construction through the Account header.
    """

    DEFAULT_SERVICE_URL = DEFAULT_SERVICE_URL
    DEFAULT_SERVICE_NAME = "container_registry"

    def __init__(self, account: Optional[str] = None, *, service_url: Optional[str] = None,
                 authenticator: Optional[Authenticator] = None,
                 transport: Optional[Transport] = None,
                 headers: Optional[Dict[str, str]] = None):
        """
        Construct a ContainerRegistryV1 client.

        Args:
            account: The unique ID for your IBM Cloud account (required)
            service_url: API base URL (defaults to the global endpoint)
            authenticator: Used to build the default transport; ignored when
                transport is given
            transport: Sends requests (defaults to HttpxTransport)
            headers: Default headers included with every request

        Raises:
            ValidationError: If account is missing
        """
        validate_params({"account": account or None}, ["account"])
        self.account = account
        self.set_service_url(service_url or self.DEFAULT_SERVICE_URL)
        self.transport = transport or HttpxTransport(authenticator)
        self._default_headers: Dict[str, str] = dict(headers or {})

    @classmethod
    def new_instance(cls, settings: Optional[Settings] = None, *,
                     authenticator: Optional[Authenticator] = None,
                     transport: Optional[Transport] = None) -> ContainerRegistryV1:
        """
        Build a client from Settings, loading anything not given from the environment.

        Args:
            settings: Client settings (default: create_settings_from_env())
            authenticator: Credentials (default: authenticator_from_env())
            transport: Transport override; settings.timeout_s and SSL options
                only apply to the default transport

        Returns:
            Configured client, with retries enabled when settings.max_retries > 0
        """
        settings = settings or create_settings_from_env()
        if transport is None:
            transport = HttpxTransport(
                authenticator or authenticator_from_env(),
                timeout_s=settings.timeout_s,
                verify=not settings.disable_ssl_verification,
            )
        service = cls(settings.account, service_url=settings.resolved_service_url, transport=transport)
        if settings.max_retries > 0:
            service.enable_retries(settings.max_retries, settings.retry_interval_s)
        return service

    @staticmethod
    def get_service_url_for_region(region: str) -> Optional[str]:
        """Return the service URL for region, or None if no mapping exists."""
        return get_service_url_for_region(region)

    @property
    def service_url(self) -> str:
        return self._service_url

    def set_service_url(self, service_url: str) -> None:
        if not service_url:
            raise ValueError("service_url must not be empty")
        self._service_url = service_url.rstrip("/")

    def set_default_headers(self, headers: Dict[str, str]) -> None:
        """Replace the headers sent with every request (per-call headers still win)."""
        self._default_headers = dict(headers)

    def enable_retries(self, max_retries: int = 4, retry_interval: float = 30.0) -> None:
        """Retry throttled, 5xx and connection failures on subsequent calls."""
        self.transport.enable_retries(max_retries, retry_interval)

    def disable_retries(self) -> None:
        self.transport.disable_retries()

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def _build_request(self, operation_id: str, method: str, url: str, *,
                       path_params: Optional[Dict[str, Any]] = None,
                       query: Optional[Dict[str, Any]] = None,
                       body: Any = None,
                       accept: bool = True,
                       content_type: bool = False,
                       account: bool = True,
                       extra_headers: Optional[Dict[str, Optional[str]]] = None,
                       headers: Optional[Dict[str, str]] = None) -> RequestDescriptor:
        """
        Assemble a RequestDescriptor.

        Header precedence, lowest first: client defaults, SDK identity
        headers, computed Accept/Content-Type/Account/extra headers, then
        the caller's headers.
        """
        computed: Dict[str, Optional[str]] = {}
        if accept:
            computed["Accept"] = _JSON
        if content_type:
            computed["Content-Type"] = _JSON
        if account:
            computed["Account"] = self.account
        computed.update(_compact(extra_headers or {}))

        merged = _merge_headers(
            self._default_headers,
            get_sdk_headers(self.DEFAULT_SERVICE_NAME, "v1", operation_id),
            computed,
            headers or {},
        )

        return RequestDescriptor(
            method=method,
            url=url,
            service_url=self.service_url,
            path_params={k: str(v) for k, v in (path_params or {}).items()},
            query=_compact(query or {}),
            body=body,
            headers=merged,
        )

    async def _send(self, request: RequestDescriptor) -> DetailedResponse:
        logger.debug(f"Dispatching {request.method} {request.url}")
        return await self.transport.send(request)

    #########################
    # authorization
    #########################

    async def get_auth(self, *, headers: Optional[Dict[str, str]] = None,
                       **kwargs) -> DetailedResponse:
        """
        Get authorization options for the targeted account.

        Returns:
            DetailedResponse with an AuthOptions body
        """
        validate_params(kwargs, [], [])
        request = self._build_request("get_auth", "GET", "/api/v1/auth", headers=headers)
        return await self._send(request)

    async def update_auth(self, *, iam_authz: Optional[bool] = None,
                          private_only: Optional[bool] = None,
                          headers: Optional[Dict[str, str]] = None,
                          **kwargs) -> DetailedResponse:
        """
        Update authorization options for the targeted account.

        Args:
            iam_authz: Enable role based authorization when authenticating with IBM Cloud IAM
            private_only: Restrict the account to push and pull over private connections only
        """
        validate_params(kwargs, [], [])
        body = _compact({
            "iam_authz": iam_authz,
            "private_only": private_only,
        })
        request = self._build_request(
            "update_auth", "PATCH", "/api/v1/auth",
            body=body, accept=False, content_type=True, headers=headers,
        )
        return await self._send(request)

    #########################
    # images
    #########################

    async def list_images(self, *, namespace: Optional[str] = None,
                          include_ibm: Optional[bool] = None,
                          include_private: Optional[bool] = None,
                          include_manifest_lists: Optional[bool] = None,
                          vulnerabilities: Optional[bool] = None,
                          repository: Optional[str] = None,
                          headers: Optional[Dict[str, str]] = None,
                          **kwargs) -> DetailedResponse:
        """
        List all images in namespaces in the targeted account.

        Args:
            namespace: Only list images stored in this namespace
            include_ibm: Include IBM-provided public images
            include_private: Include private images (server default: true)
            include_manifest_lists: Include tags that reference multi-arch manifest lists
            vulnerabilities: Include Vulnerability Advisor status
            repository: Only list images stored in this repository

        Returns:
            DetailedResponse with a list of RemoteAPIImage bodies
        """
        validate_params(kwargs, [], [])
        query = {
            "namespace": namespace,
            "includeIBM": include_ibm,
            "includePrivate": include_private,
            "includeManifestLists": include_manifest_lists,
            "vulnerabilities": vulnerabilities,
            "repository": repository,
        }
        request = self._build_request("list_images", "GET", "/api/v1/images", query=query, headers=headers)
        return await self._send(request)

    async def bulk_delete_images(self, bulk_delete: Optional[List[str]] = None, *,
                                 headers: Optional[Dict[str, str]] = None,
                                 **kwargs) -> DetailedResponse:
        """
        Remove multiple container images from the registry.

        Args:
            bulk_delete: Full registry paths of the images to delete, including
                digest. All tags for each digest are removed. Sent as the
                JSON body itself. A bare string is rejected.

        Returns:
            DetailedResponse with an ImageBulkDeleteResult body; per-digest
            failures are reported there, not raised
        """
        validate_params({"bulk_delete": bulk_delete, **kwargs}, ["bulk_delete"], ["bulk_delete"])
        if isinstance(bulk_delete, (str, bytes)):
            raise ValidationError(invalid=["bulk_delete"])
        request = self._build_request(
            "bulk_delete_images", "POST", "/api/v1/images/bulkdelete",
            body=list(bulk_delete), content_type=True, headers=headers,
        )
        return await self._send(request)

    async def list_image_digests(self, *, exclude_tagged: Optional[bool] = None,
                                 exclude_va: Optional[bool] = None,
                                 include_ibm: Optional[bool] = None,
                                 repositories: Optional[List[str]] = None,
                                 headers: Optional[Dict[str, str]] = None,
                                 **kwargs) -> DetailedResponse:
        """
        List all images by digest in namespaces in the targeted account.

        Args:
            exclude_tagged: Only return untagged digests
            exclude_va: Omit Vulnerability Advisor results
            include_ibm: Include IBM public images for the targeted region
            repositories: Restrict output to these repositories
        """
        validate_params(kwargs, [], [])
        body = _compact({
            "exclude_tagged": exclude_tagged,
            "exclude_va": exclude_va,
            "include_ibm": include_ibm,
            "repositories": list(repositories) if repositories is not None else None,
        })
        request = self._build_request(
            "list_image_digests", "POST", "/api/v1/images/digests",
            body=body, content_type=True, headers=headers,
        )
        return await self._send(request)

    async def tag_image(self, fromimage: Optional[str] = None, toimage: Optional[str] = None, *,
                        headers: Optional[Dict[str, str]] = None,
                        **kwargs) -> DetailedResponse:
        """
        Create a new tag that refers to an existing image in the same region.

        Args:
            fromimage: Source image, <REPOSITORY>:<TAG>
            toimage: New tag, <REPOSITORY>:<TAG>
        """
        params = {"fromimage": fromimage, "toimage": toimage, **kwargs}
        validate_params(params, ["fromimage", "toimage"], ["fromimage", "toimage"])
        request = self._build_request(
            "tag_image", "POST", "/api/v1/images/tags",
            query={"fromimage": fromimage, "toimage": toimage},
            accept=False, headers=headers,
        )
        return await self._send(request)

    async def delete_image(self, image: Optional[str] = None, *,
                           headers: Optional[Dict[str, str]] = None,
                           **kwargs) -> DetailedResponse:
        """
        Delete a container image and all of its tags.

        Args:
            image: Full registry path, <REPOSITORY>:<TAG> or <REPOSITORY>@<DIGEST>
        """
        validate_params({"image": image, **kwargs}, ["image"], ["image"])
        request = self._build_request(
            "delete_image", "DELETE", "/api/v1/images/{image}",
            path_params={"image": image}, headers=headers,
        )
        return await self._send(request)

    async def inspect_image(self, image: Optional[str] = None, *,
                            headers: Optional[Dict[str, str]] = None,
                            **kwargs) -> DetailedResponse:
        """Inspect a container image (returns an ImageInspection body)."""
        validate_params({"image": image, **kwargs}, ["image"], ["image"])
        request = self._build_request(
            "inspect_image", "GET", "/api/v1/images/{image}/json",
            path_params={"image": image}, headers=headers,
        )
        return await self._send(request)

    async def get_image_manifest(self, image: Optional[str] = None, *,
                                 headers: Optional[Dict[str, str]] = None,
                                 **kwargs) -> DetailedResponse:
        """Get the manifest for a container image."""
        validate_params({"image": image, **kwargs}, ["image"], ["image"])
        request = self._build_request(
            "get_image_manifest", "GET", "/api/v1/images/{image}/manifest",
            path_params={"image": image}, headers=headers,
        )
        return await self._send(request)

    #########################
    # messages
    #########################

    async def get_messages(self, *, headers: Optional[Dict[str, str]] = None,
                           **kwargs) -> DetailedResponse:
        """
        Get the current service message, if any.

        Not account scoped: no Account header is sent.
        """
        validate_params(kwargs, [], [])
        request = self._build_request(
            "get_messages", "GET", "/api/v1/messages",
            account=False, headers=headers,
        )
        return await self._send(request)

    #########################
    # namespaces
    #########################

    async def list_namespaces(self, *, headers: Optional[Dict[str, str]] = None,
                              **kwargs) -> DetailedResponse:
        validate_params(kwargs, [], [])
        request = self._build_request("list_namespaces", "GET", "/api/v1/namespaces", headers=headers)
        return await self._send(request)

    async def list_namespace_details(self, *, headers: Optional[Dict[str, str]] = None,
                                     **kwargs) -> DetailedResponse:
        """List namespaces with details such as resource group."""
        validate_params(kwargs, [], [])
        request = self._build_request(
            "list_namespace_details", "GET", "/api/v1/namespaces/details", headers=headers,
        )
        return await self._send(request)

    async def create_namespace(self, name: Optional[str] = None, *,
                               x_auth_resource_group: Optional[str] = None,
                               headers: Optional[Dict[str, str]] = None,
                               **kwargs) -> DetailedResponse:
        """
        Create a namespace.

        Args:
            name: Namespace name
            x_auth_resource_group: Resource group ID to create the namespace in
                (the account's default group when omitted)
        """
        params = {"name": name, "x_auth_resource_group": x_auth_resource_group, **kwargs}
        validate_params(params, ["name"], ["name", "x_auth_resource_group"])
        request = self._build_request(
            "create_namespace", "PUT", "/api/v1/namespaces/{name}",
            path_params={"name": name},
            extra_headers={"X-Auth-Resource-Group": x_auth_resource_group},
            headers=headers,
        )
        return await self._send(request)

    async def assign_namespace(self, x_auth_resource_group: Optional[str] = None,
                               name: Optional[str] = None, *,
                               headers: Optional[Dict[str, str]] = None,
                               **kwargs) -> DetailedResponse:
        """
        Assign a namespace that has no resource group to one.

        Args:
            x_auth_resource_group: Resource group ID
            name: Namespace name
        """
        params = {"x_auth_resource_group": x_auth_resource_group, "name": name, **kwargs}
        validate_params(params, ["x_auth_resource_group", "name"], ["x_auth_resource_group", "name"])
        request = self._build_request(
            "assign_namespace", "PATCH", "/api/v1/namespaces/{name}",
            path_params={"name": name},
            extra_headers={"X-Auth-Resource-Group": x_auth_resource_group},
            headers=headers,
        )
        return await self._send(request)

    async def delete_namespace(self, name: Optional[str] = None, *,
                               headers: Optional[Dict[str, str]] = None,
                               **kwargs) -> DetailedResponse:
        validate_params({"name": name, **kwargs}, ["name"], ["name"])
        request = self._build_request(
            "delete_namespace", "DELETE", "/api/v1/namespaces/{name}",
            path_params={"name": name}, accept=False, headers=headers,
        )
        return await self._send(request)

    #########################
    # plans
    #########################

    async def get_plans(self, *, headers: Optional[Dict[str, str]] = None,
                        **kwargs) -> DetailedResponse:
        validate_params(kwargs, [], [])
        request = self._build_request("get_plans", "GET", "/api/v1/plans", headers=headers)
        return await self._send(request)

    async def update_plans(self, *, plan: Optional[str] = None,
                           headers: Optional[Dict[str, str]] = None,
                           **kwargs) -> DetailedResponse:
        """Change the pricing plan ("free" or "standard")."""
        validate_params(kwargs, [], [])
        request = self._build_request(
            "update_plans", "PATCH", "/api/v1/plans",
            body=_compact({"plan": plan}), accept=False, content_type=True, headers=headers,
        )
        return await self._send(request)

    #########################
    # quotas
    #########################

    async def get_quota(self, *, headers: Optional[Dict[str, str]] = None,
                        **kwargs) -> DetailedResponse:
        validate_params(kwargs, [], [])
        request = self._build_request("get_quota", "GET", "/api/v1/quotas", headers=headers)
        return await self._send(request)

    async def update_quota(self, *, storage_megabytes: Optional[int] = None,
                           traffic_megabytes: Optional[int] = None,
                           headers: Optional[Dict[str, str]] = None,
                           **kwargs) -> DetailedResponse:
        """
        Set storage and pull-traffic quotas for the account.

        Args:
            storage_megabytes: Storage quota in megabytes (-1 for unlimited)
            traffic_megabytes: Monthly pull traffic quota in megabytes (-1 for unlimited)
        """
        validate_params(kwargs, [], [])
        body = _compact({
            "storage_megabytes": storage_megabytes,
            "traffic_megabytes": traffic_megabytes,
        })
        request = self._build_request(
            "update_quota", "PATCH", "/api/v1/quotas",
            body=body, accept=False, content_type=True, headers=headers,
        )
        return await self._send(request)

    #########################
    # retentions
    #########################

    async def list_retention_policies(self, *, headers: Optional[Dict[str, str]] = None,
                                      **kwargs) -> DetailedResponse:
        """List retention policies, keyed by namespace."""
        validate_params(kwargs, [], [])
        request = self._build_request(
            "list_retention_policies", "GET", "/api/v1/retentions", headers=headers,
        )
        return await self._send(request)

    async def set_retention_policy(self, namespace: Optional[str] = None, *,
                                   images_per_repo: Optional[int] = None,
                                   retain_untagged: Optional[bool] = None,
                                   headers: Optional[Dict[str, str]] = None,
                                   **kwargs) -> DetailedResponse:
        """
        Set the retention policy for a namespace.

        Args:
            namespace: Namespace the policy applies to
            images_per_repo: Images to keep per repository (-1 for unlimited)
            retain_untagged: Keep untagged images regardless of images_per_repo
        """
        params = {"namespace": namespace, "images_per_repo": images_per_repo,
                  "retain_untagged": retain_untagged, **kwargs}
        validate_params(params, ["namespace"], ["namespace", "images_per_repo", "retain_untagged"])
        body = _compact({
            "namespace": namespace,
            "images_per_repo": images_per_repo,
            "retain_untagged": retain_untagged,
        })
        request = self._build_request(
            "set_retention_policy", "POST", "/api/v1/retentions",
            body=body, accept=False, content_type=True, headers=headers,
        )
        return await self._send(request)

    async def analyze_retention_policy(self, namespace: Optional[str] = None, *,
                                       images_per_repo: Optional[int] = None,
                                       retain_untagged: Optional[bool] = None,
                                       headers: Optional[Dict[str, str]] = None,
                                       **kwargs) -> DetailedResponse:
        """
        Preview which images a retention policy would delete.

        Takes the same arguments as set_retention_policy; nothing is deleted.
        """
        params = {"namespace": namespace, "images_per_repo": images_per_repo,
                  "retain_untagged": retain_untagged, **kwargs}
        validate_params(params, ["namespace"], ["namespace", "images_per_repo", "retain_untagged"])
        body = _compact({
            "namespace": namespace,
            "images_per_repo": images_per_repo,
            "retain_untagged": retain_untagged,
        })
        request = self._build_request(
            "analyze_retention_policy", "POST", "/api/v1/retentions/analyze",
            body=body, content_type=True, headers=headers,
        )
        return await self._send(request)

    async def get_retention_policy(self, namespace: Optional[str] = None, *,
                                   headers: Optional[Dict[str, str]] = None,
                                   **kwargs) -> DetailedResponse:
        validate_params({"namespace": namespace, **kwargs}, ["namespace"], ["namespace"])
        request = self._build_request(
            "get_retention_policy", "GET", "/api/v1/retentions/{namespace}",
            path_params={"namespace": namespace}, headers=headers,
        )
        return await self._send(request)

    #########################
    # settings
    #########################

    async def get_settings(self, *, headers: Optional[Dict[str, str]] = None,
                           **kwargs) -> DetailedResponse:
        validate_params(kwargs, [], [])
        request = self._build_request("get_settings", "GET", "/api/v1/settings", headers=headers)
        return await self._send(request)

    async def update_settings(self, *, platform_metrics: Optional[bool] = None,
                              headers: Optional[Dict[str, str]] = None,
                              **kwargs) -> DetailedResponse:
        """Opt the account in or out of IBM Cloud Monitoring platform metrics."""
        validate_params(kwargs, [], [])
        request = self._build_request(
            "update_settings", "PATCH", "/api/v1/settings",
            body=_compact({"platform_metrics": platform_metrics}),
            accept=False, content_type=True, headers=headers,
        )
        return await self._send(request)

    #########################
    # tags
    #########################

    async def delete_image_tag(self, image: Optional[str] = None, *,
                               headers: Optional[Dict[str, str]] = None,
                               **kwargs) -> DetailedResponse:
        """Untag an image; the image itself stays if other tags reference it."""
        validate_params({"image": image, **kwargs}, ["image"], ["image"])
        request = self._build_request(
            "delete_image_tag", "DELETE", "/api/v1/tags/{image}",
            path_params={"image": image}, headers=headers,
        )
        return await self._send(request)

    #########################
    # trash
    #########################

    async def list_deleted_images(self, *, namespace: Optional[str] = None,
                                  headers: Optional[Dict[str, str]] = None,
                                  **kwargs) -> DetailedResponse:
        """
        List images in the trash.

        Returns:
            DetailedResponse with a digest -> Trash mapping
        """
        validate_params(kwargs, [], [])
        request = self._build_request(
            "list_deleted_images", "GET", "/api/v1/trash",
            query={"namespace": namespace}, headers=headers,
        )
        return await self._send(request)

    async def restore_tags(self, digest: Optional[str] = None, *,
                           headers: Optional[Dict[str, str]] = None,
                           **kwargs) -> DetailedResponse:
        """
        Restore the tags of a trashed digest.

        Args:
            digest: Full registry path of the digest, <REPOSITORY>@<DIGEST>

        Returns:
            DetailedResponse with a RestoreResult body
        """
        validate_params({"digest": digest, **kwargs}, ["digest"], ["digest"])
        request = self._build_request(
            "restore_tags", "POST", "/api/v1/trash/{digest}/restoretags",
            path_params={"digest": digest}, headers=headers,
        )
        return await self._send(request)

    async def restore_image(self, image: Optional[str] = None, *,
                            headers: Optional[Dict[str, str]] = None,
                            **kwargs) -> DetailedResponse:
        """Restore a trashed image by tag, <REPOSITORY>:<TAG>."""
        validate_params({"image": image, **kwargs}, ["image"], ["image"])
        request = self._build_request(
            "restore_image", "POST", "/api/v1/trash/{image}/restore",
            path_params={"image": image}, accept=False, headers=headers,
        )
        return await self._send(request)

