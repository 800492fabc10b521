"""
NeuroWiki: Thrombolytic Dosing
==============================
Single source of truth for TNK and tPA dosing on the stroke card.

All quantities are Decimal at one-decimal precision, rounded half-up
(the bedside card's Math.round(x * 10) / 10).
"""

import logging
from decimal import Decimal, ROUND_HALF_UP, localcontext

from constants import DOSING_CONSTANTS, WeightUnit
from models import ThrombolyticDoseResult, ThrombolyticDoses, WeightMeasurement
from protocols import TENECTEPLASE_TIERS, ALTEPLASE_PROTOCOL, ProportionalSplitProtocol
from rule_table import RuleTable
from safety import require_weight, coerce_unit

logger = logging.getLogger(__name__)

def _digits_needed(value: Decimal, context_prec: int) -> int:
    # Every integer digit, the tenth, and one guard digit
    return max(context_prec, value.adjusted() + 3)

def round_tenth(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _digits_needed(value, ctx.prec)
        return value.quantize(DOSING_CONSTANTS.TENTH, rounding=ROUND_HALF_UP)

def normalize_weight(magnitude, unit=WeightUnit.KG) -> Decimal:
    """
    Converts a bedside weight to kg, rounded to 0.1 kg.
    0 is the 'not yet entered' sentinel and stays 0 for either unit.
    """
    unit = coerce_unit(unit)
    weight = require_weight(magnitude, field="magnitude")

    if weight == 0:
        return DOSING_CONSTANTS.ZERO

    if unit == WeightUnit.LBS:
        with localcontext() as ctx:
            ctx.prec = _digits_needed(weight, ctx.prec) + 1
            weight = weight / DOSING_CONSTANTS.LBS_PER_KG
    return round_tenth(weight)

def normalize_measurement(measurement: WeightMeasurement) -> Decimal:
    return normalize_weight(measurement.magnitude, measurement.unit)

def tiered_bolus_dose(weight_kg, tiers: RuleTable = TENECTEPLASE_TIERS) -> Decimal:
    """
    Tenecteplase dose (mg) by weight band. Expects kg that are already
    normalized; the weight is not re-rounded here.
    """
    weight = require_weight(weight_kg, field="weight_kg")
    return tiers.evaluate(weight)

def proportional_split_dose(weight_kg,
                            protocol: ProportionalSplitProtocol = ALTEPLASE_PROTOCOL) -> ThrombolyticDoseResult:
    """
    Alteplase: 0.9 mg/kg capped at 90 mg, 10% bolus and the remainder infused.

    Order matters: the total is rounded first, the bolus is taken from the
    rounded total, and the infusion is what is left, so
    bolus + infusion == total exactly.
    """
    weight = require_weight(weight_kg, field="weight_kg")

    raw_total = weight * protocol.mg_per_kg
    capped = raw_total > protocol.max_dose_mg
    if capped:
        logger.debug("%s: %s mg capped at %s mg", protocol.name, raw_total, protocol.max_dose_mg)
    total = round_tenth(min(raw_total, protocol.max_dose_mg))

    bolus = round_tenth(total * protocol.bolus_fraction)
    infusion = total - bolus

    return ThrombolyticDoseResult(
        total_mg=total,
        bolus_mg=bolus,
        infusion_mg=infusion,
        capped=capped,
        infusion_duration_min=protocol.infusion_duration_min,
    )

def calculate_thrombolytic_doses(magnitude, unit=WeightUnit.KG) -> ThrombolyticDoses:
    """Normalizes once and doses both agents against the same kg value."""
    weight_kg = normalize_weight(magnitude, unit)
    return ThrombolyticDoses(
        weight_kg=weight_kg,
        tenecteplase_mg=tiered_bolus_dose(weight_kg),
        alteplase=proportional_split_dose(weight_kg),
    )
