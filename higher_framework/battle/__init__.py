"""
Battle module - turn-based combat system.

Provides:
- Combatants and their damage/heal/MP rules
- Skills, targeting and status effects
- Action execution (attack, skill, item, defend, flee)
- Phase state machine with enemy AI
- Win/lose conditions and rewards
"""

from higher_framework.battle.errors import (
    BattleError,
    BattleSetupError,
    FailureReason,
)
from higher_framework.battle.config import BattleConfig
from higher_framework.battle.events import BattleEvent, BattleEventLog
from higher_framework.battle.skills import (
    Skill,
    TargetShape,
    SkillResolution,
    TargetOutcome,
    resolve_skill,
)
from higher_framework.battle.actor import Combatant, Side
from higher_framework.battle.status import CombatantTick, process_status_effects
from higher_framework.battle.targeting import candidate_pool, valid_targets
from higher_framework.battle.actions import (
    BattleAction,
    BattleActionExecutor,
    ActionType,
    ActionResult,
    ItemData,
)
from higher_framework.battle.ai import EnemyAI
from higher_framework.battle.rewards import (
    BattleOutcome,
    BattleRewards,
    OutcomeKind,
    calculate_rewards,
)
from higher_framework.battle.library import (
    Catalog,
    UnitTemplate,
    builtin_catalog,
    load_catalog,
)
from higher_framework.battle.system import BattleSystem, BattleState

__all__ = [
    # Errors
    "BattleError",
    "BattleSetupError",
    "FailureReason",
    # Config and events
    "BattleConfig",
    "BattleEvent",
    "BattleEventLog",
    # Skills
    "Skill",
    "TargetShape",
    "SkillResolution",
    "TargetOutcome",
    "resolve_skill",
    # Actor
    "Combatant",
    "Side",
    "CombatantTick",
    "process_status_effects",
    "valid_targets",
    "candidate_pool",
    # Actions
    "BattleAction",
    "BattleActionExecutor",
    "ActionType",
    "ActionResult",
    "ItemData",
    "EnemyAI",
    # Outcome
    "BattleOutcome",
    "BattleRewards",
    "OutcomeKind",
    "calculate_rewards",
    # Data
    "Catalog",
    "UnitTemplate",
    "builtin_catalog",
    "load_catalog",
    # System
    "BattleSystem",
    "BattleState",
]
