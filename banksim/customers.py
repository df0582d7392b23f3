"""
Client Management Module

Client profiles and privilege levels. Higher privilege levels raise the
withdrawal limit but require more identifying information.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class PrivilegeLevel(IntEnum):
    """Privilege levels, ordered from least to most trusted"""
    INITIAL = 0        # Name only - lowest limits
    INTERMEDIATE = 1   # Address on file
    FULL = 2           # Address and passport on file - no limit


@dataclass
class Client:
    """Bank client"""
    name: str
    surname: str
    address: Optional[str] = None
    passport: Optional[str] = None
    privilege_level: PrivilegeLevel = PrivilegeLevel.INITIAL

    def __post_init__(self):
        # Accept plain ints; unknown levels raise ValueError
        self.privilege_level = PrivilegeLevel(self.privilege_level)

    @property
    def full_name(self) -> str:
        """Get client's full name"""
        return f"{self.name} {self.surname}"

    @property
    def meets_requirements(self) -> bool:
        """Check if the record holds everything its privilege level requires"""
        return check_client_requirements(self)


def check_client_requirements(client: Client) -> bool:
    """
    Check the information requirements of the client's privilege level.

    Requirements are cumulative: FULL needs a passport and everything
    INTERMEDIATE needs, INTERMEDIATE needs an address.
    """
    level = client.privilege_level
    satisfies = True
    if level >= PrivilegeLevel.FULL:
        satisfies = satisfies and client.passport is not None
    if level >= PrivilegeLevel.INTERMEDIATE:
        satisfies = satisfies and client.address is not None
    return satisfies
