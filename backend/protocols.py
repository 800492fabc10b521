# protocols.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from constants import TENECTEPLASE, ALTEPLASE, ThrombolyticAgent
from rule_table import RuleTable

@dataclass(frozen=True)
class ProportionalSplitProtocol:
    """
    total = min(weight * mg_per_kg, max_dose_mg), then split into an
    immediate bolus fraction and an infusion over a fixed duration.
    """
    name: str
    mg_per_kg: Decimal
    max_dose_mg: Decimal
    bolus_fraction: Decimal
    infusion_duration_min: int

# TNK: discrete pre-filled steps, not a continuous function of weight
TENECTEPLASE_TIERS = RuleTable(
    TENECTEPLASE.TIERS,
    default=TENECTEPLASE.MAX_DOSE_MG,
    name="tenecteplase_tiers",
)

ALTEPLASE_PROTOCOL = ProportionalSplitProtocol(
    name="alteplase",
    mg_per_kg=ALTEPLASE.MG_PER_KG,
    max_dose_mg=ALTEPLASE.MAX_DOSE_MG,
    bolus_fraction=ALTEPLASE.BOLUS_FRACTION,
    infusion_duration_min=ALTEPLASE.INFUSION_DURATION_MIN,
)

DosingProtocol = Union[RuleTable, ProportionalSplitProtocol]

class PROTOCOL_LIBRARY:
    """
    Thrombolytic protocols keyed by agent.
    Tiered agents map to a RuleTable, proportional agents to a ProportionalSplitProtocol.
    """
    SPECS = {
        ThrombolyticAgent.TENECTEPLASE: TENECTEPLASE_TIERS,
        ThrombolyticAgent.ALTEPLASE: ALTEPLASE_PROTOCOL,
    }

    @staticmethod
    def get(agent: ThrombolyticAgent) -> DosingProtocol:
        if not isinstance(agent, ThrombolyticAgent):
            agent = ThrombolyticAgent(agent)
        return PROTOCOL_LIBRARY.SPECS[agent]
