"""
Cut parameter checks shared by the emitter and the estimator.

Messages are emitted verbatim into the error program, so they stay in the
job language.
"""

from typing import List

from cncbuilder.core.exceptions import InvalidCutParametersError
from cncbuilder.models import CutConfig, RampType


def validate_cut_parameters(cut: CutConfig) -> List[str]:
    """Return every problem found in the cut configuration (empty when valid)."""
    errors = []

    if cut.depth <= 0:
        errors.append("Profundidade invalida")
    if cut.depth_per_pass <= 0:
        errors.append("Profundidade por passada invalida")
    if cut.depth > 0 and cut.depth_per_pass > cut.depth:
        errors.append("Profundidade por passada maior que profundidade total")

    if cut.feedrate <= 0:
        errors.append("Feedrate invalido")
    if cut.plunge_rate <= 0:
        errors.append("Plunge rate invalido")
    if cut.rapids_speed <= 0:
        errors.append("Rapids speed invalido")
    if cut.safe_height < 0:
        errors.append("Altura segura invalida")

    if cut.use_ramp:
        if not 0 < cut.ramp_angle < 90:
            errors.append("Angulo de rampa invalido")
        if cut.ramp_type == RampType.ZIGZAG and (
                cut.zigzag_amplitude <= 0 or cut.zigzag_pitch <= 0 or cut.max_ramp_step_z <= 0):
            errors.append("Parametros de zigzag invalidos")

    return errors


def check_cut_parameters(cut: CutConfig) -> None:
    """Raise InvalidCutParametersError when the configuration cannot be cut."""
    errors = validate_cut_parameters(cut)
    if errors:
        raise InvalidCutParametersError(errors[0], errors=errors)
