"""
Battle actions - attack, skill, item, defend, flee.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Sequence

from higher_engine.core.events import Event
from higher_framework.components import DamageType
from higher_framework.battle.actor import Combatant
from higher_framework.battle.config import BattleConfig
from higher_framework.battle.errors import FailureReason
from higher_framework.battle.events import BattleEvent, BattleEventLog
from higher_framework.battle.skills import Skill, TargetShape, can_cast, resolve_skill
from higher_framework.battle.targeting import candidate_pool, valid_targets

logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Types of battle actions."""
    ATTACK = auto()
    SKILL = auto()
    ITEM = auto()
    DEFEND = auto()
    FLEE = auto()


@dataclass
class BattleAction:
    """
    A request for one combatant to act.

    Build with the constructors rather than directly:
        BattleAction.attack(hero, goblin)
        BattleAction.use_skill(mage, firebolt, [goblin])
        BattleAction.defend(hero)
        BattleAction.use_item(cleric, "health_potion", hero)
        BattleAction.flee(hero)
    """
    actor: Combatant
    action_type: ActionType
    targets: list[Combatant] = field(default_factory=list)
    skill: Optional[Skill] = None
    item_id: Optional[str] = None

    @classmethod
    def attack(cls, actor: Combatant, target: Combatant) -> BattleAction:
        return cls(actor=actor, action_type=ActionType.ATTACK, targets=[target])

    @classmethod
    def use_skill(
        cls,
        actor: Combatant,
        skill: Skill,
        targets: Sequence[Combatant] = (),
    ) -> BattleAction:
        return cls(actor=actor, action_type=ActionType.SKILL, skill=skill, targets=list(targets))

    @classmethod
    def defend(cls, actor: Combatant) -> BattleAction:
        return cls(actor=actor, action_type=ActionType.DEFEND)

    @classmethod
    def use_item(
        cls,
        actor: Combatant,
        item_id: str,
        target: Optional[Combatant] = None,
    ) -> BattleAction:
        targets = [target] if target is not None else []
        return cls(actor=actor, action_type=ActionType.ITEM, item_id=item_id, targets=targets)

    @classmethod
    def flee(cls, actor: Combatant) -> BattleAction:
        return cls(actor=actor, action_type=ActionType.FLEE)

    @property
    def target(self) -> Optional[Combatant]:
        return self.targets[0] if self.targets else None


@dataclass
class ActionResult:
    """Result of submitting a battle action."""
    success: bool = True
    reason: Optional[FailureReason] = None
    events: list[Event] = field(default_factory=list)
    fled: bool = False

    @classmethod
    def failed(cls, reason: FailureReason) -> ActionResult:
        return cls(success=False, reason=reason)

    def of_type(self, event_type: BattleEvent) -> list[Event]:
        return [e for e in self.events if e.type == event_type]


@dataclass(frozen=True)
class ItemData:
    """Static data for a usable item."""
    id: str
    name: str
    description: str = ""
    hp_restore: int = 0
    mp_restore: int = 0
    damage: int = 0
    damage_type: DamageType = DamageType.TRUE
    target_shape: TargetShape = TargetShape.SINGLE_ALLY


class BattleActionExecutor:
    """
    Executes battle actions against combatants and records what happened.

    Every check happens before the first mutation, so a failed action
    leaves all combatants untouched.
    """

    def __init__(
        self,
        log: BattleEventLog,
        config: Optional[BattleConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self._log = log
        self._config = config or BattleConfig()
        self._rng = rng or random.Random(self._config.seed)
        self._item_database: dict[str, ItemData] = {}

    def register_item(self, item: ItemData) -> None:
        """Register an item."""
        self._item_database[item.id] = item

    def get_item(self, item_id: str) -> Optional[ItemData]:
        return self._item_database.get(item_id)

    def execute(
        self,
        action: BattleAction,
        players: Sequence[Combatant],
        enemies: Sequence[Combatant],
    ) -> ActionResult:
        """Execute any action; dispatches on its type."""
        if action.action_type == ActionType.ATTACK:
            return self.execute_attack(action.actor, action.target)
        if action.action_type == ActionType.SKILL:
            return self.execute_skill(action.actor, action.skill, action.targets, players, enemies)
        if action.action_type == ActionType.ITEM:
            return self.execute_item(action.actor, action.item_id, action.target, players, enemies)
        if action.action_type == ActionType.DEFEND:
            return self.execute_defend(action.actor)
        return self.execute_flee(action.actor)

    def fail(self, actor: Optional[Combatant], reason: FailureReason) -> ActionResult:
        """Report a rejected action."""
        logger.warning(
            "Action by %s rejected: %s",
            actor.name if actor else "nobody",
            reason.value,
        )
        self._log.emit(BattleEvent.ACTION_FAILED, reason=reason, actor=actor)
        return ActionResult.failed(reason)

    def execute_attack(self, attacker: Combatant, target: Optional[Combatant]) -> ActionResult:
        """Basic physical attack with the attacker's attack stat as raw power."""
        if target is None:
            return self.fail(attacker, FailureReason.NO_TARGETS)
        if not target.is_alive:
            return self.fail(attacker, FailureReason.DEAD_TARGET)
        if target.side is attacker.side:
            return self.fail(attacker, FailureReason.INVALID_TARGET)

        damage = target.apply_damage(
            attacker.attack,
            DamageType.PHYSICAL,
            defend_multiplier=self._config.defend_multiplier,
        )
        logger.debug("%s attacks %s for %d", attacker.name, target.name, damage)
        self._log.emit(
            BattleEvent.DAMAGE_DEALT,
            target=target,
            amount=damage,
            damage_type=DamageType.PHYSICAL,
        )
        self._report_defeat(target)
        return ActionResult()

    def execute_skill(
        self,
        caster: Combatant,
        skill: Optional[Skill],
        targets: Sequence[Combatant],
        players: Sequence[Combatant],
        enemies: Sequence[Combatant],
    ) -> ActionResult:
        """Cast a skill the caster knows."""
        if skill is None or not any(s is skill for s in caster.skills):
            return self.fail(caster, FailureReason.UNKNOWN_SKILL)
        if not can_cast(skill, caster):
            return self.fail(caster, FailureReason.NOT_ENOUGH_MP)

        resolved = self.resolve_targets(skill, caster, targets, players, enemies)
        if isinstance(resolved, FailureReason):
            return self.fail(caster, resolved)

        resolution = resolve_skill(
            skill,
            caster,
            resolved,
            buff_duration=self._config.buff_duration,
            defend_multiplier=self._config.defend_multiplier,
        )
        if not resolution.success:
            return self.fail(caster, FailureReason.NOT_ENOUGH_MP)

        logger.debug(
            "%s uses %s on %s",
            caster.name,
            skill.name,
            ", ".join(t.name for t in resolved),
        )
        self._log.emit(BattleEvent.SKILL_USED, caster=caster, skill=skill, targets=list(resolved))

        for outcome in resolution.outcomes:
            target = outcome.target
            if skill.power > 0:
                self._log.emit(
                    BattleEvent.DAMAGE_DEALT,
                    target=target,
                    amount=outcome.damage,
                    damage_type=skill.damage_type,
                )
            if skill.heal_power > 0:
                self._log.emit(BattleEvent.HEALING_DONE, target=target, amount=outcome.healing)
            for effect in outcome.statuses:
                self._log.emit(
                    BattleEvent.STATUS_APPLIED,
                    target=target,
                    effect=effect.status_type,
                    duration=effect.duration,
                )
            if outcome.defeated:
                self._log.emit(BattleEvent.UNIT_DEFEATED, unit=target)

        return ActionResult()

    def resolve_targets(
        self,
        skill: Skill,
        caster: Combatant,
        requested: Sequence[Combatant],
        players: Sequence[Combatant],
        enemies: Sequence[Combatant],
    ) -> list[Combatant] | FailureReason:
        """
        Final target list for a skill, or the reason there is none.

        Self, all-* and random shapes ignore the request. Single shapes take
        the requested target, which must be a living legal candidate.
        """
        candidates = valid_targets(skill.target_shape, caster, players, enemies, self._rng)
        if not candidates:
            return FailureReason.NO_TARGETS

        if not skill.target_shape.is_single:
            return candidates

        if not requested:
            return FailureReason.NO_TARGETS
        target = requested[0]
        if not target.is_alive:
            return FailureReason.DEAD_TARGET
        if not any(c is target for c in candidates):
            return FailureReason.INVALID_TARGET
        return [target]

    def execute_item(
        self,
        user: Combatant,
        item_id: Optional[str],
        target: Optional[Combatant],
        players: Sequence[Combatant],
        enemies: Sequence[Combatant],
    ) -> ActionResult:
        """
        Use an item on one target. A missing target means the user.

        The target must be a living member of the item's target pool, e.g.
        a potion only works on the user's own side.
        """
        item = self.get_item(item_id) if item_id else None
        if item is None:
            return self.fail(user, FailureReason.UNKNOWN_ITEM)

        target = target or user
        if not target.is_alive:
            return self.fail(user, FailureReason.DEAD_TARGET)
        pool = candidate_pool(item.target_shape, user, players, enemies)
        if not any(c is target for c in pool):
            return self.fail(user, FailureReason.INVALID_TARGET)

        logger.debug("%s uses %s on %s", user.name, item.name, target.name)

        if item.hp_restore > 0:
            healed = target.apply_heal(item.hp_restore)
            self._log.emit(BattleEvent.HEALING_DONE, target=target, amount=healed)

        if item.mp_restore > 0:
            restored = target.restore_mp(item.mp_restore)
            self._log.emit(BattleEvent.MP_RESTORED, target=target, amount=restored)

        if item.damage > 0:
            damage = target.apply_damage(
                item.damage,
                item.damage_type,
                defend_multiplier=self._config.defend_multiplier,
            )
            self._log.emit(
                BattleEvent.DAMAGE_DEALT,
                target=target,
                amount=damage,
                damage_type=item.damage_type,
            )
            self._report_defeat(target)

        return ActionResult()

    def execute_defend(self, actor: Combatant) -> ActionResult:
        """Defend until the start of this side's next phase."""
        actor.start_defend()
        logger.debug("%s defends", actor.name)
        self._log.emit(BattleEvent.UNIT_DEFENDED, unit=actor)
        return ActionResult()

    def execute_flee(self, actor: Combatant) -> ActionResult:
        """Escape from battle. Always succeeds when fleeing is allowed."""
        if not self._config.can_flee:
            return self.fail(actor, FailureReason.CANNOT_FLEE)
        logger.debug("%s flees", actor.name)
        return ActionResult(fled=True)

    def _report_defeat(self, target: Combatant) -> None:
        if target.consume_defeat():
            logger.debug("%s is defeated", target.name)
            self._log.emit(BattleEvent.UNIT_DEFEATED, unit=target)
