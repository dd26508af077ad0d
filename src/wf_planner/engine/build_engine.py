"""Build engine: holds one loadout and answers questions about it.

Composes the pure calculators (aggregation, drain, elements, Forma,
derived stats) over a slot layout built from the equipment's slot
configuration. The engine owns only its slot list; every query returns a
freshly computed result and never mutates mods or equipment records.

Slot indices follow the layout order: general slots first (0..n-1, the
4x2 element grid for weapons), then aura, second aura, stance, exilus,
and posture slots where the equipment has them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from wf_planner.engine.build_config import BuildConfig
from wf_planner.engine.drain import CapacitySummary, total_capacity
from wf_planner.engine.elements import (
    DamageEntry,
    combine_elements,
    element_mods_from_slots,
)
from wf_planner.engine.forma import FormaCount, forma_cost
from wf_planner.engine.mod_filtering import is_mod_locked_out
from wf_planner.engine.stat_aggregator import aggregate_build
from wf_planner.models.constants import (
    AURA,
    EQUIPMENT_SLOT_CONFIGS,
    EXILUS,
    GENERAL,
    PHYSICAL_TYPES,
    POSTURE,
    STANCE,
    Polarity,
)
from wf_planner.models.derived_stats import (
    WarframeStats,
    WeaponStats,
    compute_warframe_stats,
    compute_weapon_stats,
)
from wf_planner.models.effect import EffectBag
from wf_planner.models.item import Warframe, Weapon
from wf_planner.models.mod import Mod, ModSlot, SlotPolarity


class BuildError(ValueError):
    """An edit the loadout cannot accept (bad slot index, locked-out mod, ...)."""


@dataclass(slots=True)
class SlotLayout:
    """Default polarities for a piece of equipment."""

    polarities: list[str | None]
    aura_polarity: str | None = None
    exilus_polarity: str | None = None
    stance_polarity: str | None = None


def default_slots(equipment_type: str, layout: SlotLayout | None = None) -> list[ModSlot]:
    """Empty slots for an equipment type with its default polarities."""
    config = EQUIPMENT_SLOT_CONFIGS.get(equipment_type)
    if config is None:
        raise ValueError(f"Unknown equipment type: {equipment_type!r}")
    layout = layout or SlotLayout(polarities=[])

    slots = [
        ModSlot(
            index=i,
            type=GENERAL,
            polarity=layout.polarities[i] if i < len(layout.polarities) else None,
        )
        for i in range(config.general_slots)
    ]

    def add(slot_type: str, polarity: str | None) -> None:
        slots.append(ModSlot(index=len(slots), type=slot_type, polarity=polarity))

    if config.has_aura:
        add(AURA, layout.aura_polarity)
    if config.has_second_aura:
        add(AURA, None)
    if config.has_stance:
        add(STANCE, layout.stance_polarity)
    if config.has_exilus:
        add(EXILUS, layout.exilus_polarity)
    if config.has_posture:
        add(POSTURE, None)
    return slots


def layout_for(equipment: Warframe | Weapon) -> SlotLayout:
    """Default slot polarities as stored on an equipment record."""
    return SlotLayout(
        polarities=list(equipment.slot_polarities()),
        aura_polarity=getattr(equipment, "aura_polarity", None),
        exilus_polarity=getattr(equipment, "exilus_polarity", None),
        stance_polarity=getattr(equipment, "stance_polarity", None),
    )


class BuildEngine:
    """One editable loadout plus read-only queries over it."""

    __slots__ = ("_equipment_type", "_slots", "_defaults", "_reactor", "_config")

    def __init__(
        self,
        equipment_type: str,
        layout: SlotLayout | None = None,
        reactor: bool = False,
        config: BuildConfig | None = None,
    ) -> None:
        self._equipment_type = equipment_type
        self._slots = default_slots(equipment_type, layout)
        self._defaults = [SlotPolarity(s.polarity, s.type) for s in self._slots]
        self._reactor = reactor
        self._config = config or BuildConfig()

    # --- Factories ---------------------------------------------------------

    @classmethod
    def for_equipment(
        cls,
        equipment_type: str,
        equipment: Warframe | Weapon,
        reactor: bool = False,
        config: BuildConfig | None = None,
    ) -> BuildEngine:
        """Start from the equipment record's default polarities."""
        return cls(equipment_type, layout_for(equipment), reactor, config)

    def copy(self) -> BuildEngine:
        """Independent copy for speculative edits (mods are shared, slots are not)."""
        clone = BuildEngine.__new__(BuildEngine)
        clone._equipment_type = self._equipment_type
        clone._slots = [replace(slot) for slot in self._slots]
        clone._defaults = list(self._defaults)
        clone._reactor = self._reactor
        clone._config = self._config
        return clone

    # --- State -------------------------------------------------------------

    @property
    def equipment_type(self) -> str:
        return self._equipment_type

    @property
    def slots(self) -> tuple[ModSlot, ...]:
        return tuple(self._slots)

    @property
    def reactor(self) -> bool:
        return self._reactor

    @reactor.setter
    def reactor(self, value: bool) -> None:
        self._reactor = bool(value)

    def equipped_mods(self) -> list[Mod]:
        return [slot.mod for slot in self._slots if slot.mod is not None]

    # --- Edits -------------------------------------------------------------

    def _slot(self, index: int) -> ModSlot:
        if not 0 <= index < len(self._slots):
            raise BuildError(f"No slot {index} on {self._equipment_type}")
        return self._slots[index]

    def equip(self, index: int, mod: Mod, rank: int | None = None) -> None:
        """Place `mod` in slot `index`, replacing whatever was there."""
        slot = self._slot(index)
        others = [s.mod for s in self._slots if s.mod is not None and s is not slot]
        if is_mod_locked_out(mod, others):
            raise BuildError(f"{mod.name} is already equipped (or a variant of it)")
        slot.mod = mod
        slot.rank = rank
        slot.set_rank = None

    def unequip(self, index: int) -> Mod | None:
        slot = self._slot(index)
        mod, slot.mod, slot.rank, slot.set_rank = slot.mod, None, None, None
        return mod

    def set_rank(self, index: int, rank: int | None) -> None:
        self._slot(index).rank = rank

    def set_polarity(self, index: int, polarity: str | None) -> None:
        """Change a slot's polarity (the thing Forma pays for)."""
        if polarity is not None:
            try:
                polarity = Polarity(polarity).value
            except ValueError:
                raise BuildError(f"Unknown polarity: {polarity!r}") from None
        self._slot(index).polarity = polarity

    # --- Queries -----------------------------------------------------------

    def effects(self) -> EffectBag:
        """Summed mod and set-bonus effects."""
        return aggregate_build(self._slots)

    def capacity(self) -> CapacitySummary:
        return total_capacity(
            self._slots,
            base_capacity=self._config.base_capacity,
            reactor=self._reactor,
            reactor_multiplier=self._config.reactor_multiplier,
        )

    def forma_cost(self) -> FormaCount:
        """Forma needed to go from the default polarities to the current ones."""
        return forma_cost(self._defaults, self._slots)

    def damage(self, weapon: Weapon) -> list[DamageEntry]:
        """Per-type damage after base damage mods and element combination."""
        effects = self.effects()
        scale = 1 + effects.base_damage
        base = [value * scale for value in weapon.base_damage()]
        damage_scale = sum(base) or (weapon.total_damage or 0.0) * scale
        multipliers = {t: effects.damage_type_delta(t) for t in PHYSICAL_TYPES}
        return combine_elements(
            base,
            element_mods_from_slots(self._slots, damage_scale),
            multipliers,
            decimals=self._config.damage_decimals,
        )

    def warframe_stats(self, warframe: Warframe) -> WarframeStats:
        return compute_warframe_stats(warframe, self._slots, effects=self.effects())

    def weapon_stats(self, weapon: Weapon) -> WeaponStats:
        return compute_weapon_stats(weapon, self._slots, effects=self.effects())
