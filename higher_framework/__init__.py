"""
Higher framework - JRPG battle rules built on the higher engine.

Provides:
- Components (stats, HP/MP pools, status ledgers)
- Battle (combatants, skills, targeting, turn/phase controller, rewards)
"""
