"""Resource types that accept resource-scoped permission grants."""

from enum import StrEnum

from grantwise.domain.exceptions import ValidationError


class ResourceType(StrEnum):
    """Kinds of infrastructure resources a grant can target."""

    SERVER = "server"
    K8S_CLUSTER = "k8s_cluster"
    K8S_NAMESPACE = "k8s_namespace"
    DOCKER_CONTAINER = "docker_container"
    HARBOR_PROJECT = "harbor_project"

    @classmethod
    def parse(cls, value: "str | ResourceType") -> "ResourceType":
        """Convert a raw value into a ResourceType or raise ValidationError."""
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"invalid resource type: {value}") from None


NAMESPACE_SEPARATOR = "/"


def namespace_resource_id(cluster_id: str, namespace: str) -> str:
    """Compose the resource id of a Kubernetes namespace: ``<cluster>/<namespace>``.

    Namespace names are DNS labels and never contain the separator, so the
    composition can be split back unambiguously on its last separator.
    """
    if not cluster_id:
        raise ValidationError("cluster id must not be empty")
    if not namespace or NAMESPACE_SEPARATOR in namespace:
        raise ValidationError(f"invalid namespace: {namespace!r}")
    return f"{cluster_id}{NAMESPACE_SEPARATOR}{namespace}"


def split_namespace_resource_id(resource_id: str) -> tuple[str, str]:
    """Split a namespace resource id into ``(cluster_id, namespace)``."""
    cluster_id, sep, namespace = resource_id.rpartition(NAMESPACE_SEPARATOR)
    if not sep or not cluster_id or not namespace:
        raise ValidationError(f"not a namespace resource id: {resource_id!r}")
    return cluster_id, namespace
