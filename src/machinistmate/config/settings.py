"""Application preferences (persisted to disk)."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from ..core.toolpath.threadmill import NOMINAL_RADIAL_STEP
from ..core.units import Units
from ..gcode.program import EmitterConfig
from .machine_profiles import HaasModel


@dataclass
class AppSettings:
    """User preferences, serialized to ~/.machinistmate/settings.json.

    Lengths (``nominal_radial_step``, ``retract_z``) are stored in inches
    and converted with :meth:`length` for metric programs.
    """

    default_machine: str = HaasModel.VF_2.value
    default_units: str = Units.INCH.value
    nominal_radial_step: float = NOMINAL_RADIAL_STEP
    retract_z: float = 1.0
    end_of_block: str = ""
    percent: bool = False
    tool_file: str = ""          # JSON tool library; empty -> starter tools

    @staticmethod
    def _path() -> Path:
        return Path.home() / ".machinistmate" / "settings.json"

    @property
    def machine(self) -> HaasModel:
        return HaasModel(self.default_machine)

    @property
    def units(self) -> Units:
        return Units(self.default_units)

    def length(self, inches: float) -> float:
        """*inches* expressed in the program units."""
        return Units.INCH.convert(inches, self.units)

    def emitter_config(self) -> EmitterConfig:
        return EmitterConfig(
            units=self.units,
            retract_z=self.length(self.retract_z),
            end_of_block=self.end_of_block,
            percent=self.percent,
        )

    def save(self, path: Optional[Path] = None) -> None:
        p = path or self._path()
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(asdict(self), indent=2))

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppSettings":
        p = path or cls._path()
        if p.exists():
            data = json.loads(p.read_text())
            return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        return cls()
