"""Haas vertical mill profiles.

Travel limits are in inches, feeds in IPM.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..gcode.validate import MachineEnvelope


class HaasModel(Enum):
    MINI_MILL = "mini"
    VF_2 = "vf2"
    VF_4 = "vf4"
    TM_1 = "tm1"


@dataclass
class MachineProfile:
    """Travel and spindle limits of one mill model."""

    model: str
    envelope: MachineEnvelope

    def __str__(self) -> str:
        e = self.envelope
        return (
            f"Haas {self.model}  "
            f"X={e.x_travel}\" Y={e.y_travel}\" Z={e.z_travel}\"  "
            f"{e.min_rpm}-{e.max_rpm} RPM  "
            f"{e.max_feed} IPM"
        )


_PROFILES: dict[HaasModel, MachineProfile] = {
    HaasModel.MINI_MILL: MachineProfile(
        model="Mini Mill",
        envelope=MachineEnvelope(
            x_travel=16.0, y_travel=12.0, z_travel=10.0,
            min_rpm=1, max_rpm=6000, max_feed=500.0,
        ),
    ),
    HaasModel.VF_2: MachineProfile(
        model="VF-2",
        envelope=MachineEnvelope(
            x_travel=30.0, y_travel=16.0, z_travel=20.0,
            min_rpm=1, max_rpm=8100, max_feed=650.0,
        ),
    ),
    HaasModel.VF_4: MachineProfile(
        model="VF-4",
        envelope=MachineEnvelope(
            x_travel=50.0, y_travel=20.0, z_travel=25.0,
            min_rpm=1, max_rpm=8100, max_feed=650.0,
        ),
    ),
    HaasModel.TM_1: MachineProfile(
        model="TM-1",
        envelope=MachineEnvelope(
            x_travel=30.0, y_travel=12.0, z_travel=16.0,
            min_rpm=1, max_rpm=4000, max_feed=200.0,
        ),
    ),
}


def get_profile(model: HaasModel) -> MachineProfile:
    return _PROFILES[model]


def list_profiles() -> list[MachineProfile]:
    return list(_PROFILES.values())
