"""
Cut, tool and time models for toolpath generation.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Any
from enum import Enum

from cncbuilder.units import format_time


class RampType(Enum):
    """Entry strategy used instead of a vertical plunge."""
    LINEAR = "linear"
    ZIGZAG = "zigzag"


class RampScope(Enum):
    """Which depth passes get a ramped entry."""
    FIRST_PASS = "primeira-passada"
    ALL_PASSES = "todas-passadas"


@dataclass
class CutConfig:
    """Spacing, depth, feed and ramp parameters (mm, mm/min, rpm, degrees)."""
    depth: float = 15.0
    spacing: float = 50.0
    depth_per_pass: float = 4.0
    feedrate: float = 1500.0
    plunge_rate: float = 500.0
    rapids_speed: float = 4000.0
    spindle_speed: float = 18000.0
    use_ramp: bool = False
    ramp_type: RampType = RampType.LINEAR
    ramp_angle: float = 3.0
    ramp_scope: RampScope = RampScope.FIRST_PASS
    zigzag_amplitude: float = 2.0
    zigzag_pitch: float = 5.0
    max_ramp_step_z: float = 0.5
    same_edge_spacing: bool = True
    edge_margin: float = 50.0
    safe_height: float = 5.0

    @property
    def effective_edge_margin(self) -> Optional[float]:
        """Margin handed to the nesting engine (None means 'same as spacing')."""
        if self.same_edge_spacing:
            return None
        return self.edge_margin

    def to_dict(self) -> Dict[str, Any]:
        return {
            'profundidade': self.depth,
            'espacamento': self.spacing,
            'profundidadePorPassada': self.depth_per_pass,
            'feedrate': self.feedrate,
            'plungeRate': self.plunge_rate,
            'rapidsSpeed': self.rapids_speed,
            'spindleSpeed': self.spindle_speed,
            'usarRampa': self.use_ramp,
            'tipoRampa': self.ramp_type.value,
            'anguloRampa': self.ramp_angle,
            'aplicarRampaEm': self.ramp_scope.value,
            'zigZagAmplitude': self.zigzag_amplitude,
            'zigZagPitch': self.zigzag_pitch,
            'maxRampStepZ': self.max_ramp_step_z,
            'usarMesmoEspacamentoBorda': self.same_edge_spacing,
            'margemBorda': self.edge_margin,
            'alturaSegura': self.safe_height,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'CutConfig':
        return cls(
            depth=float(data.get('profundidade', 15.0)),
            spacing=float(data.get('espacamento', 50.0)),
            depth_per_pass=float(data.get('profundidadePorPassada', 4.0)),
            feedrate=float(data.get('feedrate', 1500.0)),
            plunge_rate=float(data.get('plungeRate', 500.0)),
            rapids_speed=float(data.get('rapidsSpeed', 4000.0)),
            spindle_speed=float(data.get('spindleSpeed', 18000.0)),
            use_ramp=bool(data.get('usarRampa', False)),
            ramp_type=RampType(data.get('tipoRampa', RampType.LINEAR.value)),
            ramp_angle=float(data.get('anguloRampa', 3.0)),
            ramp_scope=RampScope(data.get('aplicarRampaEm', RampScope.FIRST_PASS.value)),
            zigzag_amplitude=float(data.get('zigZagAmplitude', 2.0)),
            zigzag_pitch=float(data.get('zigZagPitch', 5.0)),
            max_ramp_step_z=float(data.get('maxRampStepZ', 0.5)),
            same_edge_spacing=bool(data.get('usarMesmoEspacamentoBorda', True)),
            edge_margin=float(data.get('margemBorda', 50.0)),
            safe_height=float(data.get('alturaSegura', 5.0))
        )


@dataclass
class ToolConfig:
    """Router bit."""
    diameter: float = 6.0
    tool_number: int = 1

    @property
    def radius(self) -> float:
        return self.diameter / 2.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'diametro': self.diameter,
            'numeroFerramenta': self.tool_number
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'ToolConfig':
        return cls(
            diameter=float(data.get('diametro', 6.0)),
            tool_number=int(data.get('numeroFerramenta', 1))
        )


@dataclass
class TimeEstimate:
    """Estimated machining time in seconds."""
    cutting: float = 0.0
    plunging: float = 0.0
    positioning: float = 0.0

    @property
    def total(self) -> float:
        return self.cutting + self.plunging + self.positioning

    @property
    def formatted(self) -> str:
        return format_time(self.total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tempoTotal': self.total,
            'tempoCorte': self.cutting,
            'tempoMergulho': self.plunging,
            'tempoPosicionamento': self.positioning,
            'tempoFormatado': self.formatted
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'TimeEstimate':
        return cls(
            cutting=data.get('tempoCorte', 0.0),
            plunging=data.get('tempoMergulho', 0.0),
            positioning=data.get('tempoPosicionamento', 0.0)
        )
