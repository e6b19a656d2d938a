"""
Battle system - turn-based combat controller.

A battle alternates phases. In the player phase the caller submits one
action per living player unit, in roster order. The enemy phase then runs
to completion through the AI. Status effects tick at the start of every
phase, and the end condition is checked after every action and every tick
pass.

The controller never blocks or waits: each public call processes
everything it can and returns the events it produced, so the caller can
animate them before submitting the next action.
"""

from __future__ import annotations

import logging
import random
from enum import Enum, auto
from typing import Any, Iterable, Optional, Sequence

from higher_engine.core.events import Event, EventBus
from higher_framework.battle.actions import (
    ActionResult,
    BattleAction,
    BattleActionExecutor,
    ItemData,
)
from higher_framework.battle.actor import Combatant, Side
from higher_framework.battle.ai import EnemyAI
from higher_framework.battle.config import BattleConfig
from higher_framework.battle.errors import BattleSetupError, FailureReason
from higher_framework.battle.events import BattleEvent, BattleEventLog
from higher_framework.battle.library import builtin_catalog
from higher_framework.battle.rewards import (
    BattleOutcome,
    BattleRewards,
    OutcomeKind,
    calculate_rewards,
)
from higher_framework.battle.skills import Skill
from higher_framework.battle.status import process_status_effects
from higher_framework.battle.targeting import alive, candidate_pool

logger = logging.getLogger(__name__)


class BattleState(Enum):
    """State of the battle."""
    NONE = auto()
    SETUP = auto()
    PLAYER_PHASE = auto()
    ANIMATING = auto()
    ENEMY_PHASE = auto()
    VICTORY = auto()
    DEFEAT = auto()
    ESCAPED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (BattleState.VICTORY, BattleState.DEFEAT, BattleState.ESCAPED)


_OUTCOME_STATES = {
    OutcomeKind.VICTORY: BattleState.VICTORY,
    OutcomeKind.DEFEAT: BattleState.DEFEAT,
    OutcomeKind.ESCAPED: BattleState.ESCAPED,
}


class BattleSystem:
    """
    Turn-based battle controller.

    Manages:
    - Battle initialization (battle-scoped copies of both rosters)
    - Player phase cursor and action validation
    - Enemy phase AI
    - Status effect ticks
    - Win/lose conditions and rewards

    Usage:
        battle = BattleSystem(rng=random.Random(7))
        battle.start_battle([hero, mage], [goblin, goblin2])
        while not battle.is_over:
            unit = battle.current_unit
            result = battle.submit_action(BattleAction.attack(unit, battle.enemies[0]))
    """

    def __init__(
        self,
        config: Optional[BattleConfig] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
        items: Optional[Iterable[ItemData]] = None,
    ):
        self.config = config or BattleConfig()
        self._rng = rng or random.Random(self.config.seed)
        self._log = BattleEventLog(event_bus)

        self.state = BattleState.NONE
        self._players: list[Combatant] = []
        self._enemies: list[Combatant] = []
        self._cursor: int = 0
        self._round: int = 0
        self._original_enemy_count: int = 0
        self._item_drops: tuple[str, ...] = ()
        self._outcome: Optional[BattleOutcome] = None

        self._executor = BattleActionExecutor(self._log, self.config, self._rng)
        self._ai = EnemyAI(self._rng, self.config.enemy_skill_chance)

        if items is None:
            items = builtin_catalog().items.values()
        for item in items:
            self.register_item(item)

    def register_item(self, item: ItemData) -> None:
        """Register an item."""
        self._executor.register_item(item)

    # Battle flow

    def start_battle(
        self,
        players: Sequence[Combatant],
        enemies: Sequence[Combatant],
        item_drops: Sequence[str] = (),
    ) -> list[Event]:
        """
        Start a battle.

        Both rosters are duplicated; the given combatants are never touched.

        Args:
            players: Player party, in turn order
            enemies: Enemy roster, in turn order
            item_drops: Items awarded on victory

        Returns:
            Events emitted up to the first player's turn

        Raises:
            BattleSetupError: if this system already ran a battle or a roster is empty
        """
        if self.state.is_terminal:
            raise BattleSetupError(
                f"Battle already finished ({self.state.name}); start a new BattleSystem"
            )
        if self.state != BattleState.NONE:
            raise BattleSetupError(f"Battle already in progress ({self.state.name})")
        if not players:
            raise BattleSetupError("Player roster is empty")
        if not enemies:
            raise BattleSetupError("Enemy roster is empty")

        mark = self._log.mark()
        self.state = BattleState.SETUP

        self._players = [c.duplicate(side=Side.PLAYER, position=i) for i, c in enumerate(players)]
        self._enemies = [c.duplicate(side=Side.ENEMY, position=i) for i, c in enumerate(enemies)]
        self._original_enemy_count = len(self._enemies)
        self._item_drops = tuple(item_drops)

        logger.info(
            "Battle started: %s vs %s",
            ", ".join(c.name for c in self._players),
            ", ".join(c.name for c in self._enemies),
        )
        self._log.emit(
            BattleEvent.BATTLE_STARTED,
            players=list(self._players),
            enemies=list(self._enemies),
        )

        self._start_player_phase()
        return self._log.since(mark)

    def submit_action(self, action: BattleAction) -> ActionResult:
        """
        Resolve one player action.

        The actor must be the living unit at the phase cursor. A rejected
        action changes nothing and the same unit keeps the turn. When the
        last player unit has acted, the whole enemy phase runs before this
        returns.
        """
        mark = self._log.mark()
        result = self._submit(action)
        result.events = self._log.since(mark)
        return result

    def _submit(self, action: BattleAction) -> ActionResult:
        if self.state.is_terminal:
            return self._executor.fail(action.actor, FailureReason.BATTLE_OVER)
        if self.state != BattleState.PLAYER_PHASE:
            return self._executor.fail(action.actor, FailureReason.NOT_PLAYER_PHASE)
        if not action.actor.is_alive:
            return self._executor.fail(action.actor, FailureReason.DEAD_ACTOR)
        if action.actor is not self.current_unit:
            return self._executor.fail(action.actor, FailureReason.NOT_YOUR_TURN)

        self.state = BattleState.ANIMATING
        result = self._executor.execute(action, self._players, self._enemies)
        self.state = BattleState.PLAYER_PHASE

        if not result.success:
            return result

        if result.fled:
            self._end_battle(BattleOutcome.escaped())
            return result

        if self._check_battle_end():
            return result

        self._cursor += 1
        if self._cursor >= len(alive(self._players)):
            self._run_enemy_phase()
        else:
            self._announce_turn(self.current_unit)

        return result

    def _start_player_phase(self) -> None:
        """Begin a player phase: reset guards, tick statuses, hand over the first unit."""
        self._round += 1
        self._cursor = 0
        self.state = BattleState.PLAYER_PHASE

        for unit in self._players:
            unit.end_defend()

        logger.info("Round %d: player phase", self._round)
        self._log.emit(BattleEvent.PHASE_CHANGED, is_player_phase=True)

        if self._tick_statuses():
            return

        self._announce_turn(self.current_unit)

    def _run_enemy_phase(self) -> None:
        """Run every living enemy through the AI, then hand back to the players."""
        self.state = BattleState.ENEMY_PHASE
        self._cursor = 0

        for unit in self._enemies:
            unit.end_defend()

        logger.info("Round %d: enemy phase", self._round)
        self._log.emit(BattleEvent.PHASE_CHANGED, is_player_phase=False)

        if self._tick_statuses():
            return

        for enemy in alive(self._enemies):
            if not enemy.is_alive:
                continue

            self._announce_turn(enemy)
            action = self._ai.choose_action(enemy, self._players, self._enemies)
            if action is None:
                break

            self.state = BattleState.ANIMATING
            self._executor.execute(action, self._players, self._enemies)
            self.state = BattleState.ENEMY_PHASE
            self._cursor += 1

            if self._check_battle_end():
                return

        if self._check_battle_end():
            return

        self._start_player_phase()

    def _announce_turn(self, unit: Optional[Combatant]) -> None:
        if unit is None:
            return
        logger.debug("%s's turn (%s)", unit.name, unit.status_line())
        self._log.emit(BattleEvent.UNIT_TURN_STARTED, unit=unit, is_player=unit.is_player)

    def _tick_statuses(self) -> bool:
        """
        Run the status tick pass over both rosters.

        Returns:
            True if the battle ended as a result
        """
        for tick in process_status_effects(self._players + self._enemies):
            for effect_result in tick.results:
                self._log.emit(BattleEvent.STATUS_TICKED, target=tick.target, result=effect_result)
            if tick.defeated:
                logger.debug("%s succumbs to status effects", tick.target.name)
                self._log.emit(BattleEvent.UNIT_DEFEATED, unit=tick.target)

        return self._check_battle_end()

    def _check_battle_end(self) -> bool:
        """
        Check if battle should end.

        Player loss is checked first, so a simultaneous wipe is a defeat.
        """
        if self.state.is_terminal:
            return True

        if not alive(self._players):
            self._end_battle(BattleOutcome.defeat())
            return True

        if not alive(self._enemies):
            rewards = calculate_rewards(
                self._original_enemy_count,
                self.config.exp_per_enemy,
                self.config.gold_per_enemy,
                self._item_drops,
            )
            self._end_battle(BattleOutcome.victory(rewards))
            return True

        return False

    def _end_battle(self, outcome: BattleOutcome) -> None:
        """Enter a terminal state and notify."""
        self._outcome = outcome
        self.state = _OUTCOME_STATES[outcome.kind]

        if outcome.rewards:
            logger.info(
                "Battle ended: %s (%d EXP, %d gold)",
                outcome.kind.value,
                outcome.rewards.experience,
                outcome.rewards.gold,
            )
        else:
            logger.info("Battle ended: %s", outcome.kind.value)

        self._log.emit(BattleEvent.BATTLE_ENDED, outcome=outcome)

    # Queries

    @property
    def current_unit(self) -> Optional[Combatant]:
        """The player unit whose turn it is, if any."""
        if self.state not in (BattleState.PLAYER_PHASE, BattleState.ANIMATING):
            return None
        living = alive(self._players)
        if self._cursor < len(living):
            return living[self._cursor]
        return None

    def can_player_act(self) -> bool:
        return self.state == BattleState.PLAYER_PHASE and self.current_unit is not None

    def targets_for(self, skill: Skill, caster: Combatant) -> list[Combatant]:
        """Everyone a skill could land on, for menus. Never draws from the RNG."""
        return candidate_pool(skill.target_shape, caster, self._players, self._enemies)

    @property
    def is_active(self) -> bool:
        return self.state != BattleState.NONE and not self.state.is_terminal

    @property
    def is_over(self) -> bool:
        return self.state.is_terminal

    @property
    def is_player_phase(self) -> bool:
        return self.state == BattleState.PLAYER_PHASE

    @property
    def outcome(self) -> Optional[BattleOutcome]:
        return self._outcome

    @property
    def rewards(self) -> Optional[BattleRewards]:
        return self._outcome.rewards if self._outcome else None

    @property
    def players(self) -> list[Combatant]:
        """Battle copies of the player party."""
        return self._players

    @property
    def enemies(self) -> list[Combatant]:
        """Battle copies of the enemy roster."""
        return self._enemies

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def round_count(self) -> int:
        return self._round

    @property
    def event_log(self) -> list[Event]:
        return self._log.events

    def events_of(self, event_type: BattleEvent) -> list[Event]:
        return self._log.of_type(event_type)

    def summary(self) -> dict[str, Any]:
        """Plain snapshot of the battle for display or logging."""
        def unit_info(unit: Combatant) -> dict[str, Any]:
            return {
                "name": unit.name,
                "hp": unit.current_hp,
                "max_hp": unit.max_hp,
                "mp": unit.current_mp,
                "max_mp": unit.max_mp,
                "defending": unit.is_defending,
                "statuses": [
                    {"kind": e.status_type.value, "duration": e.duration, "potency": e.potency}
                    for e in unit.statuses
                ],
            }

        return {
            "state": self.state.name,
            "round": self._round,
            "cursor": self._cursor,
            "players": [unit_info(u) for u in self._players],
            "enemies": [unit_info(u) for u in self._enemies],
            "outcome": self._outcome.kind.value if self._outcome else None,
        }
