"""
IBM Cloud Container Registry CLI

Thin command line front-end over ContainerRegistryV1:
- regions / region-url: Regional endpoint lookup (no network)
- namespaces, namespace-create, namespace-delete: Namespace management
- images, image-inspect, image-delete, tag: Image management
- quota, plans, settings, messages: Account information
- retention-get, retention-set: Retention policies
- trash, restore: Trash and restore

Configuration comes from CONTAINER_REGISTRY_* environment variables.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import typer

from .cli_context import CLIContext
from .models import (
    AccountSettings,
    ImageInspection,
    NamespaceDetails,
    Plan,
    Quota,
    RemoteAPIImage,
    RestoreResult,
    RetentionPolicy,
    Trash,
)
from .operations import run_and_exit
from .operations.printers import (
    print_account_settings,
    print_done,
    print_image_inspection,
    print_images,
    print_messages,
    print_namespace_details,
    print_namespaces,
    print_plan,
    print_quota,
    print_regions,
    print_restore_result,
    print_retention_policy,
    print_trash,
)
from .regions import REGIONAL_ENDPOINTS, get_service_url_for_region

app = typer.Typer(name="icr", help="IBM Cloud Container Registry CLI")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Log HTTP traffic at debug level"),
) -> None:
    """Manage IBM Cloud Container Registry resources."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def regions() -> None:
    """List known regions and their registry endpoints."""
    print_regions(REGIONAL_ENDPOINTS)


@app.command("region-url")
def region_url(region: str = typer.Argument(..., help="Region key, e.g. us-south")) -> None:
    """Print the registry endpoint for a region."""
    url = get_service_url_for_region(region)
    if url is None:
        typer.echo(f"Unknown region: {region}", err=True)
        raise typer.Exit(code=1)
    typer.echo(url)


@app.command()
def namespaces(
    details: bool = typer.Option(False, "--details", help="Include resource group and dates"),
) -> None:
    """List namespaces in the targeted account."""

    def _namespaces() -> None:
        context = CLIContext.from_env()
        if details:
            response = context.run(lambda s: s.list_namespace_details())
            print_namespace_details([NamespaceDetails.model_validate(d) for d in response.result or []])
        else:
            response = context.run(lambda s: s.list_namespaces())
            print_namespaces(list(response.result or []))

    run_and_exit(_namespaces)


@app.command("namespace-create")
def namespace_create(
    name: str = typer.Argument(..., help="Namespace to create"),
    resource_group: Optional[str] = typer.Option(None, "--resource-group", help="Resource group ID"),
) -> None:
    """Create a namespace."""

    def _create() -> None:
        context = CLIContext.from_env()
        context.run(lambda s: s.create_namespace(name, x_auth_resource_group=resource_group))
        print_done(f"Created namespace {name}")

    run_and_exit(_create)


@app.command("namespace-delete")
def namespace_delete(name: str = typer.Argument(..., help="Namespace to delete")) -> None:
    """Delete a namespace and every image in it."""

    def _delete() -> None:
        context = CLIContext.from_env()
        context.run(lambda s: s.delete_namespace(name))
        print_done(f"Deleted namespace {name}")

    run_and_exit(_delete)


@app.command()
def images(
    namespace: Optional[str] = typer.Option(None, "--namespace", help="Only list images in this namespace"),
    repository: Optional[str] = typer.Option(None, "--repository", help="Only list images in this repository"),
    include_ibm: bool = typer.Option(False, "--include-ibm", help="Include IBM-provided public images"),
    include_manifest_lists: bool = typer.Option(False, "--manifest-lists", help="Include multi-arch manifest lists"),
    vulnerabilities: bool = typer.Option(False, "--va", help="Show Vulnerability Advisor status"),
) -> None:
    """List images in the targeted account."""

    def _images() -> None:
        context = CLIContext.from_env()
        response = context.run(lambda s: s.list_images(
            namespace=namespace,
            repository=repository,
            include_ibm=include_ibm or None,
            include_manifest_lists=include_manifest_lists or None,
            vulnerabilities=vulnerabilities or None,
        ))
        print_images([RemoteAPIImage.model_validate(i) for i in response.result or []])

    run_and_exit(_images)


@app.command("image-inspect")
def image_inspect(image: str = typer.Argument(..., help="<REPOSITORY>:<TAG> or <REPOSITORY>@<DIGEST>")) -> None:
    """Show details of an image."""

    def _inspect() -> None:
        context = CLIContext.from_env()
        response = context.run(lambda s: s.inspect_image(image))
        print_image_inspection(image, ImageInspection.model_validate(response.result or {}))

    run_and_exit(_inspect)


@app.command("image-delete")
def image_delete(image: str = typer.Argument(..., help="<REPOSITORY>:<TAG> or <REPOSITORY>@<DIGEST>")) -> None:
    """Delete an image and all of its tags (moves it to the trash)."""

    def _delete() -> None:
        context = CLIContext.from_env()
        context.run(lambda s: s.delete_image(image))
        print_done(f"Deleted image {image}")

    run_and_exit(_delete)


@app.command()
def tag(
    fromimage: str = typer.Argument(..., help="Source image, <REPOSITORY>:<TAG>"),
    toimage: str = typer.Argument(..., help="New tag, <REPOSITORY>:<TAG>"),
) -> None:
    """Create a new tag for an existing image."""

    def _tag() -> None:
        context = CLIContext.from_env()
        context.run(lambda s: s.tag_image(fromimage, toimage))
        print_done(f"Tagged {fromimage} as {toimage}")

    run_and_exit(_tag)


@app.command()
def quota() -> None:
    """Show quota usage and limits."""

    def _quota() -> None:
        context = CLIContext.from_env()
        response = context.run(lambda s: s.get_quota())
        print_quota(Quota.model_validate(response.result or {}))

    run_and_exit(_quota)


@app.command()
def plans() -> None:
    """Show the account's pricing plan."""

    def _plans() -> None:
        context = CLIContext.from_env()
        response = context.run(lambda s: s.get_plans())
        print_plan(Plan.model_validate(response.result or {}))

    run_and_exit(_plans)


@app.command()
def settings() -> None:
    """Show account settings."""

    def _settings() -> None:
        context = CLIContext.from_env()
        response = context.run(lambda s: s.get_settings())
        print_account_settings(AccountSettings.model_validate(response.result or {}))

    run_and_exit(_settings)


@app.command()
def messages() -> None:
    """Show the current service message."""

    def _messages() -> None:
        context = CLIContext.from_env()
        response = context.run(lambda s: s.get_messages())
        print_messages(response.result)

    run_and_exit(_messages)


@app.command("retention-get")
def retention_get(namespace: str = typer.Argument(..., help="Namespace")) -> None:
    """Show the retention policy of a namespace."""

    def _get() -> None:
        context = CLIContext.from_env()
        response = context.run(lambda s: s.get_retention_policy(namespace))
        print_retention_policy(RetentionPolicy.model_validate(response.result))

    run_and_exit(_get)


@app.command("retention-set")
def retention_set(
    namespace: str = typer.Argument(..., help="Namespace"),
    images_per_repo: Optional[int] = typer.Option(None, "--images-per-repo", help="Images to keep per repository (-1 = unlimited)"),
    retain_untagged: Optional[bool] = typer.Option(None, "--retain-untagged/--no-retain-untagged", help="Keep untagged images"),
    analyze: bool = typer.Option(False, "--analyze", help="Only list the images the policy would delete"),
) -> None:
    """Set (or preview) the retention policy of a namespace."""

    def _set() -> None:
        context = CLIContext.from_env()
        if analyze:
            response = context.run(lambda s: s.analyze_retention_policy(
                namespace, images_per_repo=images_per_repo, retain_untagged=retain_untagged,
            ))
            doomed: List[str] = []
            for repo_images in (response.result or {}).values():
                doomed.extend(repo_images)
            if not doomed:
                print_done("No images would be deleted")
            for image in doomed:
                print_done(f"Would delete: {image}")
            return
        context.run(lambda s: s.set_retention_policy(
            namespace, images_per_repo=images_per_repo, retain_untagged=retain_untagged,
        ))
        print_done(f"Retention policy set for {namespace}")

    run_and_exit(_set)


@app.command()
def trash(
    namespace: Optional[str] = typer.Option(None, "--namespace", help="Only list trash for this namespace"),
) -> None:
    """List deleted images in the trash."""

    def _trash() -> None:
        context = CLIContext.from_env()
        response = context.run(lambda s: s.list_deleted_images(namespace=namespace))
        entries = {digest: Trash.model_validate(entry) for digest, entry in (response.result or {}).items()}
        print_trash(entries)

    run_and_exit(_trash)


@app.command()
def restore(
    image: str = typer.Argument(..., help="<REPOSITORY>:<TAG> or, with --tags, <REPOSITORY>@<DIGEST>"),
    tags: bool = typer.Option(False, "--tags", help="Restore every tag of a trashed digest"),
) -> None:
    """Restore an image (or a digest's tags) from the trash."""

    def _restore() -> None:
        context = CLIContext.from_env()
        if tags:
            response = context.run(lambda s: s.restore_tags(image))
            print_restore_result(RestoreResult.model_validate(response.result or {}))
        else:
            context.run(lambda s: s.restore_image(image))
            print_done(f"Restored {image}")

    run_and_exit(_restore)


if __name__ == "__main__":
    app()
