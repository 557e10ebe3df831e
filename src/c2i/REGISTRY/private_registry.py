"""
Prefixing of image names with a private registry.
"""
from typing import Optional

DEFAULT_NAMESPACE = "rancher"


def resolve_with_registry(image: str, registry: Optional[str]) -> str:
    """
    Returns the name ``image`` is pulled as from ``registry``.

    Images already under the registry are returned unchanged. Images without
    a namespace (``busybox``) are moved to the ``rancher`` namespace first,
    since that is where library images are mirrored.

    Examples:
        - ("busybox", "reg.local:5000") -> reg.local:5000/rancher/busybox
        - ("rancher/shell:v0.1.6", "reg.local") -> reg.local/rancher/shell:v0.1.6
        - ("rancher/shell:v0.1.6", "") -> rancher/shell:v0.1.6
    """
    if not registry or image.startswith(registry):
        return image
    if "/" not in image:
        image = f"{DEFAULT_NAMESPACE}/{image}"
    return f"{registry.rstrip('/')}/{image}"
