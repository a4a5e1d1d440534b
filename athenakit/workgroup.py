"""Athena workgroups: configuration, tags and remote creation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

__all__ = [
    "VERSION",
    "DEFAULT_BYTES_SCANNED_CUTOFF_PER_QUERY",
    "AthenaNilAPIError",
    "Tag",
    "WGTags",
    "WorkGroupConfig",
    "default_wg_config",
    "Workgroup",
    "get_workgroup",
]

VERSION = "0.1.0"

# One gigabyte scanned per query unless configured otherwise.
DEFAULT_BYTES_SCANNED_CUTOFF_PER_QUERY = 1024 * 1024 * 1024


class AthenaNilAPIError(ValueError):
    """Raised when an Athena client is required but none was given."""

    def __init__(self, message: str = "athena client is missing") -> None:
        super().__init__(message)


class AthenaClient(Protocol):
    """The subset of an Athena client that workgroups need."""

    def get_work_group(self, **kwargs: Any) -> dict: ...

    def create_work_group(self, **kwargs: Any) -> dict: ...


@dataclass(frozen=True)
class Tag:
    """One key/value tag attached to a workgroup."""

    key: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"Key": self.key, "Value": self.value}


@dataclass
class WGTags:
    """An ordered collection of workgroup tags."""

    tags: list[Tag] = field(default_factory=list)

    def add_tag(self, key: str, value: str) -> None:
        """Append a tag."""
        self.tags.append(Tag(key, value))

    def get(self) -> list[Tag]:
        """Return the tags in the order they were added."""
        return self.tags

    def __len__(self) -> int:
        return len(self.tags)


@dataclass
class WorkGroupConfig:
    """Settings of an Athena workgroup."""

    bytes_scanned_cutoff_per_query: int = DEFAULT_BYTES_SCANNED_CUTOFF_PER_QUERY
    enforce_work_group_configuration: bool = True
    publish_cloud_watch_metrics_enabled: bool = True
    requester_pays_enabled: bool = False
    result_configuration: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        """The configuration in the shape the Athena API expects."""
        data: dict[str, Any] = {
            "BytesScannedCutoffPerQuery": self.bytes_scanned_cutoff_per_query,
            "EnforceWorkGroupConfiguration": self.enforce_work_group_configuration,
            "PublishCloudWatchMetricsEnabled": self.publish_cloud_watch_metrics_enabled,
            "RequesterPaysEnabled": self.requester_pays_enabled,
        }
        if self.result_configuration is not None:
            data["ResultConfiguration"] = self.result_configuration
        return data


def default_wg_config() -> WorkGroupConfig:
    """A configuration with the default cutoff, enforcement and metrics on."""
    return WorkGroupConfig()


@dataclass
class Workgroup:
    """A named Athena workgroup with optional configuration and tags."""

    name: str
    config: Optional[WorkGroupConfig] = None
    tags: Optional[WGTags] = None

    @classmethod
    def default(
        cls,
        name: str,
        config: Optional[WorkGroupConfig] = None,
        tags: Optional[WGTags] = None,
    ) -> "Workgroup":
        """A workgroup that falls back to the default config and empty tags."""
        return cls(
            name=name,
            config=config if config is not None else default_wg_config(),
            tags=tags if tags is not None else WGTags(),
        )

    def create_remotely(self, client: AthenaClient) -> dict:
        """Create this workgroup through ``client``; client errors propagate."""
        if client is None:
            raise AthenaNilAPIError()
        request: dict[str, Any] = {"Name": self.name}
        if self.config is not None:
            request["Configuration"] = self.config.to_dict()
        tags = self.tags.get() if self.tags is not None else []
        if tags:
            request["Tags"] = [tag.to_dict() for tag in tags]
        return client.create_work_group(**request)


def get_workgroup(client: Optional[AthenaClient], name: str) -> dict:
    """Fetch the description of workgroup ``name`` from Athena."""
    if client is None:
        raise AthenaNilAPIError()
    response = client.get_work_group(WorkGroup=name)
    return response["WorkGroup"]