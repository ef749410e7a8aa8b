from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class StatusColor(Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    GREY = "grey"  # unknown


@dataclass(frozen=True)
class StatusEntry:
    service: str
    status: StatusColor
    name: str
    essential: bool


_STATUS_HEX: dict[StatusColor, str] = {
    StatusColor.GREEN: "#a5c325",
    StatusColor.YELLOW: "#eac918",
    StatusColor.RED: "#c32625",
    StatusColor.GREY: "#848484",
}


def default_statuses() -> tuple[StatusEntry, ...]:
    """Known services, in display order, all with an unknown status."""
    return (
        StatusEntry(
            "mojang-multiplayer-session-service",
            StatusColor.GREY,
            "Multiplayer Session Service",
            essential=True,
        ),
        StatusEntry(
            "minecraft-skins", StatusColor.GREY, "Minecraft Skins", essential=False
        ),
        StatusEntry(
            "mojang-s-public-api", StatusColor.GREY, "Public API", essential=False
        ),
        StatusEntry(
            "mojang-accounts-website",
            StatusColor.GREY,
            "Mojang Accounts Website",
            essential=False,
        ),
        StatusEntry(
            "microsoft-o-auth-server",
            StatusColor.GREY,
            "Microsoft OAuth Server",
            essential=True,
        ),
        StatusEntry(
            "xbox-live-auth-server",
            StatusColor.GREY,
            "Xbox Live Auth Server",
            essential=True,
        ),
        StatusEntry(
            "xbox-live-gatekeeper",
            StatusColor.GREY,
            "Xbox Live Gatekeeper",
            essential=True,
        ),
        StatusEntry(
            "microsoft-minecraft-api",
            StatusColor.GREY,
            "Minecraft API for Microsoft Accounts",
            essential=True,
        ),
        StatusEntry(
            "microsoft-minecraft-profile",
            StatusColor.GREY,
            "Minecraft Profile for Microsoft Accounts",
            essential=False,
        ),
    )


def essential_statuses(statuses: Iterable[StatusEntry]) -> tuple[StatusEntry, ...]:
    return tuple(s for s in statuses if s.essential)


def status_to_hex(status: StatusColor | str) -> str:
    """
    Convert a status color to a hex value.

    Accepts a StatusColor or its name ("green", "yellow", "red", "grey"),
    case-insensitively. Grey stands for an unknown status and is also what
    anything unrecognized maps to.
    """
    if not isinstance(status, StatusColor):
        try:
            status = StatusColor(str(status).lower())
        except ValueError:
            status = StatusColor.GREY
    return _STATUS_HEX[status]
