"""
Data models for pieces, sheets and nesting results.

Python attributes are English snake_case; ``to_dict`` / ``from_dict`` use
the camelCase wire names of the job format (largura, altura, naoCouberam...).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum

from cncbuilder.geometry import Rect


class CutType(Enum):
    """Which side of the outline the tool runs on."""
    EXTERNAL = "externo"
    INTERNAL = "interno"
    ON_LINE = "na-linha"


class NestingMethod(Enum):
    """Placement heuristic."""
    GREEDY = "greedy"
    SHELF = "shelf"
    GUILLOTINE = "guillotine"


@dataclass(frozen=True)
class Piece:
    """Rectangular piece requested by the caller."""
    id: str
    width: float
    height: float
    cut_type: CutType = CutType.EXTERNAL
    priority: Optional[int] = None
    name: Optional[str] = None
    ignored: Optional[bool] = None
    original_number: Optional[int] = None

    @property
    def area(self) -> float:
        """Footprint in mm2; invalid dimensions count as zero."""
        return max(self.width, 0.0) * max(self.height, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'largura': self.width,
            'altura': self.height,
            'tipoCorte': self.cut_type.value,
        }
        if self.priority is not None:
            result['prioridade'] = self.priority
        if self.name is not None:
            result['nome'] = self.name
        if self.ignored is not None:
            result['ignorada'] = self.ignored
        if self.original_number is not None:
            result['numeroOriginal'] = self.original_number
        return result

    @classmethod
    def from_dict(cls, data: Dict) -> 'Piece':
        return cls(
            id=str(data.get('id', '')),
            width=float(data.get('largura', 0.0)),
            height=float(data.get('altura', 0.0)),
            cut_type=CutType(data.get('tipoCorte', CutType.EXTERNAL.value)),
            priority=int(data['prioridade']) if data.get('prioridade') is not None else None,
            name=data.get('nome'),
            ignored=data.get('ignorada'),
            original_number=data.get('numeroOriginal')
        )


@dataclass(frozen=True)
class PositionedPiece:
    """Piece with the bottom-left corner chosen by the nesting engine."""
    piece: Piece
    x: float
    y: float

    @property
    def id(self) -> str:
        return self.piece.id

    @property
    def width(self) -> float:
        return self.piece.width

    @property
    def height(self) -> float:
        return self.piece.height

    @property
    def cut_type(self) -> CutType:
        return self.piece.cut_type

    @property
    def name(self) -> Optional[str]:
        return self.piece.name

    @property
    def original_number(self) -> Optional[int]:
        return self.piece.original_number

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.piece.width, self.piece.height)

    def to_dict(self) -> Dict[str, Any]:
        result = self.piece.to_dict()
        result['x'] = self.x
        result['y'] = self.y
        return result

    @classmethod
    def from_dict(cls, data: Dict) -> 'PositionedPiece':
        return cls(
            piece=Piece.from_dict(data),
            x=float(data.get('x', 0.0)),
            y=float(data.get('y', 0.0))
        )


@dataclass
class Sheet:
    """Stock sheet; thickness only matters for depth checks."""
    width: float = 2850.0
    height: float = 1500.0
    thickness: float = 15.0

    def to_dict(self) -> Dict[str, float]:
        return {
            'largura': self.width,
            'altura': self.height,
            'espessura': self.thickness
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Sheet':
        return cls(
            width=float(data.get('largura', 2850.0)),
            height=float(data.get('altura', 1500.0)),
            thickness=float(data.get('espessura', 15.0))
        )


@dataclass
class NestingMetrics:
    """Area usage of a nesting run."""
    total_area: float = 0.0
    used_area: float = 0.0
    efficiency: float = 0.0
    elapsed_ms: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            'areaTotal': self.total_area,
            'areaUtilizada': self.used_area,
            'eficiencia': self.efficiency,
            'tempo': self.elapsed_ms
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'NestingMetrics':
        return cls(
            total_area=data.get('areaTotal', 0.0),
            used_area=data.get('areaUtilizada', 0.0),
            efficiency=data.get('eficiencia', 0.0),
            elapsed_ms=data.get('tempo', 0.0)
        )


@dataclass
class NestingResult:
    """Outcome of one nesting run; every input piece lands in exactly one list."""
    placed: List[PositionedPiece] = field(default_factory=list)
    unplaced: List[Piece] = field(default_factory=list)
    metrics: NestingMetrics = field(default_factory=NestingMetrics)

    @property
    def all_placed(self) -> bool:
        return not self.unplaced

    def to_dict(self) -> Dict[str, Any]:
        return {
            'posicionadas': [p.to_dict() for p in self.placed],
            'naoCouberam': [p.to_dict() for p in self.unplaced],
            'metricas': self.metrics.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'NestingResult':
        return cls(
            placed=[PositionedPiece.from_dict(p) for p in data.get('posicionadas', [])],
            unplaced=[Piece.from_dict(p) for p in data.get('naoCouberam', [])],
            metrics=NestingMetrics.from_dict(data.get('metricas', {}))
        )
