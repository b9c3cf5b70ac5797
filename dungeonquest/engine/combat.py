"""Combat system for turn-based combat."""

import logging
import math
from typing import Optional, Union

from dungeonquest.engine.dice import Dice
from dungeonquest.errors import CombatError
from dungeonquest.models.actions import AttackResult
from dungeonquest.models.combatants import Boss, Combatant, Enemy
from dungeonquest.models.settings import GameSettings

logger = logging.getLogger(__name__.split(".")[-1])


class CombatEngine:
    """Resolves attacks between two combatants.

    A normal attack draws, in order: damage variance, critical hit, dodge,
    block. Mitigation always runs dodge -> block -> defense, and a dodge
    ends it early.
    """

    def __init__(self, dice: Optional[Dice] = None, settings: Optional[GameSettings] = None) -> None:
        self.dice = dice or Dice()
        self.settings = settings or GameSettings()

    def resolve_attack(self, attacker: Combatant, defender: Combatant) -> AttackResult:
        """
        Resolve one directed attack.

        Args:
            attacker: Combatant dealing damage
            defender: Combatant receiving damage

        Returns:
            AttackResult with the damage dealt and mitigation flags

        Raises:
            CombatError: If either side is missing or the attacker is dead
        """
        self._check_participants(attacker, defender)

        stats = attacker.stats
        damage = stats.attack_power + self.dice.variance(self.settings.damage_variance)

        critical = self.dice.chance(stats.crit_chance)
        if critical:
            damage = int(damage * stats.crit_multiplier)

        damage = max(damage, 1)
        return self._mitigate(attacker, defender, damage, critical=critical)

    def deliver(self, defender: Combatant, damage: int, source: str = "unknown") -> AttackResult:
        """Run a fixed amount of damage through the defender's mitigation."""
        if defender is None:
            raise CombatError("Target cannot be None")
        if damage < 0:
            raise ValueError("Damage cannot be negative")
        return self._mitigate(None, defender, damage, attacker_name=source)

    def enemy_turn(self, foe: Union[Enemy, Boss], target: Combatant) -> AttackResult:
        """Let an enemy act. A ready boss may use its special ability instead of attacking."""
        match foe:
            case Boss():
                return self._boss_turn(foe, target)
            case _:
                return self.resolve_attack(foe, target)

    def use_special_ability(self, boss: Boss, target: Combatant) -> AttackResult:
        """Fire the boss special: ``floor(attack_power * multiplier)`` through normal mitigation."""
        self._check_participants(boss, target)

        damage = math.floor(boss.stats.attack_power * self.settings.boss_special_multiplier)
        boss.reset_cooldown()
        logger.debug(f"{boss.name} uses {boss.special_ability_name} for {damage} pre-mitigation damage")
        return self._mitigate(boss, target, damage, special=boss.special_ability_name)

    def _boss_turn(self, boss: Boss, target: Combatant) -> AttackResult:
        self._check_participants(boss, target)

        if boss.special_ready and self.dice.chance(self.settings.boss_special_chance):
            return self.use_special_ability(boss, target)

        boss.tick_cooldown()
        return self.resolve_attack(boss, target)

    def _mitigate(
        self,
        attacker: Optional[Combatant],
        defender: Combatant,
        damage: int,
        critical: bool = False,
        special: Optional[str] = None,
        attacker_name: Optional[str] = None,
    ) -> AttackResult:
        name = attacker.name if attacker is not None else attacker_name
        defender_stats = defender.stats

        if self.dice.chance(defender_stats.dodge_chance):
            logger.debug(f"{defender.name} dodged {name}")
            return AttackResult(
                attacker=name,
                defender=defender.name,
                damage=0,
                defender_health=defender_stats.health,
                critical=critical,
                dodged=True,
                special=special,
            )

        blocked = self.dice.chance(defender_stats.block_chance)
        if blocked:
            damage = damage // 2

        actual_damage = defender.take_damage(damage)
        logger.debug(
            f"{name} hit {defender.name} for {actual_damage} "
            f"(critical={critical}, blocked={blocked}, health={defender.stats.health})"
        )

        return AttackResult(
            attacker=name,
            defender=defender.name,
            damage=actual_damage,
            defender_health=defender.stats.health,
            critical=critical,
            blocked=blocked,
            special=special,
        )

    @staticmethod
    def _check_participants(attacker: Combatant, defender: Combatant) -> None:
        if attacker is None:
            raise CombatError("Attacker cannot be None")
        if defender is None:
            raise CombatError("Target cannot be None")
        if not attacker.is_alive:
            raise CombatError(f"{attacker.name} is dead and cannot attack")
