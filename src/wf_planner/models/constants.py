"""Warframe polarities, slot types, damage types, and per-equipment slot layouts.

Polarity keys and the 20-entry damage type order come from the public
export data. Everything the engine compares against raw record fields is
kept as plain strings (or a str-valued Enum whose member names equal their
values) so data-store strings and constants compare and hash the same.
"""

from dataclasses import dataclass
from enum import Enum


class Polarity(str, Enum):
    """Polarity keys as they appear on slot and mod records."""
    AP_ATTACK = "AP_ATTACK"      # Madurai
    AP_DEFENSE = "AP_DEFENSE"    # Vazarin
    AP_TACTIC = "AP_TACTIC"      # Naramon
    AP_WARD = "AP_WARD"          # Unairu
    AP_POWER = "AP_POWER"        # Zenurik
    AP_PRECEPT = "AP_PRECEPT"    # Penjaga
    AP_UMBRA = "AP_UMBRA"        # exceptional: neutral against AP_ANY
    AP_ANY = "AP_ANY"            # universal: matches every regular polarity


AP_ATTACK = Polarity.AP_ATTACK.value
AP_DEFENSE = Polarity.AP_DEFENSE.value
AP_TACTIC = Polarity.AP_TACTIC.value
AP_WARD = Polarity.AP_WARD.value
AP_POWER = Polarity.AP_POWER.value
AP_PRECEPT = Polarity.AP_PRECEPT.value
AP_UMBRA = Polarity.AP_UMBRA.value
AP_ANY = Polarity.AP_ANY.value

REGULAR_POLARITIES: tuple[str, ...] = (
    AP_ATTACK,
    AP_DEFENSE,
    AP_TACTIC,
    AP_WARD,
    AP_POWER,
    AP_PRECEPT,
)

POLARITY_NAMES: dict[str, str] = {
    AP_ATTACK: "Madurai",
    AP_DEFENSE: "Vazarin",
    AP_TACTIC: "Naramon",
    AP_WARD: "Unairu",
    AP_POWER: "Zenurik",
    AP_PRECEPT: "Penjaga",
    AP_UMBRA: "Umbra",
    AP_ANY: "Aura",
}


# Slot types
GENERAL = "general"
AURA = "aura"
STANCE = "stance"
EXILUS = "exilus"
POSTURE = "posture"

SLOT_TYPES: tuple[str, ...] = (GENERAL, AURA, STANCE, EXILUS, POSTURE)

# Slot types that add capacity instead of consuming it
CAPACITY_SLOT_TYPES: tuple[str, ...] = (AURA, STANCE, POSTURE)


# Index order of a weapon's 20-float damage_per_shot array
DAMAGE_TYPES: tuple[str, ...] = (
    "Impact",
    "Puncture",
    "Slash",
    "Heat",
    "Cold",
    "Electricity",
    "Toxin",
    "Blast",
    "Radiation",
    "Gas",
    "Magnetic",
    "Viral",
    "Corrosive",
    "Void",
    "Tau",
    "Cinematic",
    "ShieldDrain",
    "HealthDrain",
    "EnergyDrain",
    "True",
)

PHYSICAL_TYPES: tuple[str, ...] = ("Impact", "Puncture", "Slash")

# Storage order; the innate elements start at index 3 of DAMAGE_TYPES
PRIMARY_ELEMENTS: tuple[str, ...] = ("Heat", "Cold", "Electricity", "Toxin")
PRIMARY_ELEMENT_OFFSET = 3

# HCET: when a weapon has two innate elements, the earlier one sorts first.
ELEMENT_PRIORITY: tuple[str, ...] = ("Heat", "Cold", "Electricity", "Toxin")

# Secondary element -> unordered pair of primaries
ELEMENT_COMBINATIONS: dict[str, frozenset[str]] = {
    "Blast": frozenset(("Heat", "Cold")),
    "Corrosive": frozenset(("Electricity", "Toxin")),
    "Gas": frozenset(("Heat", "Toxin")),
    "Magnetic": frozenset(("Cold", "Electricity")),
    "Radiation": frozenset(("Electricity", "Heat")),
    "Viral": frozenset(("Cold", "Toxin")),
}


# Equipment types
WARFRAME = "warframe"
PRIMARY = "primary"
SECONDARY = "secondary"
MELEE = "melee"
ARCHGUN = "archgun"
ARCHMELEE = "archmelee"
COMPANION = "companion"
ARCHWING = "archwing"
NECRAMECH = "necramech"
KDRIVE = "kdrive"

EQUIPMENT_TYPES: tuple[str, ...] = (
    WARFRAME,
    PRIMARY,
    SECONDARY,
    MELEE,
    COMPANION,
    ARCHWING,
    ARCHGUN,
    ARCHMELEE,
    NECRAMECH,
    KDRIVE,
)


@dataclass(frozen=True, slots=True)
class EquipmentSlotConfig:
    """Which slots a piece of equipment exposes."""
    general_slots: int
    has_aura: bool = False
    has_stance: bool = False
    has_exilus: bool = False
    has_posture: bool = False
    has_second_aura: bool = False   # Jade only


EQUIPMENT_SLOT_CONFIGS: dict[str, EquipmentSlotConfig] = {
    WARFRAME: EquipmentSlotConfig(general_slots=8, has_aura=True, has_exilus=True),
    PRIMARY: EquipmentSlotConfig(general_slots=8, has_exilus=True),
    SECONDARY: EquipmentSlotConfig(general_slots=8, has_exilus=True),
    MELEE: EquipmentSlotConfig(general_slots=8, has_stance=True, has_exilus=True),
    ARCHGUN: EquipmentSlotConfig(general_slots=8),
    ARCHMELEE: EquipmentSlotConfig(general_slots=8),
    COMPANION: EquipmentSlotConfig(general_slots=10),
    "beast_claws": EquipmentSlotConfig(general_slots=8, has_posture=True),
    ARCHWING: EquipmentSlotConfig(general_slots=8),
    NECRAMECH: EquipmentSlotConfig(general_slots=12),
    KDRIVE: EquipmentSlotConfig(general_slots=8),
    "tektolyst": EquipmentSlotConfig(general_slots=5),
}
