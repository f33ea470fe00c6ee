from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DeveloperAppVersion:
    owner: str | None
    versionId: int | None
    version: str | None
    applicationKey: str
    delayData: bool = False
    subscriptionRequired: bool = False
    ownerManaged: bool = False
    active: bool = False

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "DeveloperAppVersion":
        return DeveloperAppVersion(
            owner=d.get("owner"),
            versionId=d.get("versionId"),
            version=d.get("version"),
            applicationKey=d.get("applicationKey") or "",
            delayData=bool(d.get("delayData", False)),
            subscriptionRequired=bool(d.get("subscriptionRequired", False)),
            ownerManaged=bool(d.get("ownerManaged", False)),
            active=bool(d.get("active", False)),
        )


@dataclass(frozen=True)
class DeveloperApplication:
    appName: str
    appId: int | None
    appVersions: tuple[DeveloperAppVersion, ...] = field(default_factory=tuple)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "DeveloperApplication":
        return DeveloperApplication(
            appName=d.get("appName") or "",
            appId=d.get("appId"),
            appVersions=tuple(
                DeveloperAppVersion.from_dict(v) for v in d.get("appVersions", []) or [] if isinstance(v, dict)
            ),
        )
