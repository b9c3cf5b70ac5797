"""Stat calculation system."""

from dungeonquest.models.items import ArmorItem, WeaponItem
from dungeonquest.models.player import Player
from dungeonquest.models.stats import CombatStats


class StatCalculator:
    """Computes effective stats (base + equipped weapon and armor)."""

    @staticmethod
    def calculate_current_stats(player: Player) -> CombatStats:
        """
        Calculate current effective stats for a player.

        Live health is carried over from the player's current stats and
        clamped to the new maximum.

        Args:
            player: Player to calculate stats for

        Returns:
            New CombatStats with effective values
        """
        base = player.base_stats
        effective_stats = {
            "max_health": base.max_health,
            "attack_power": base.attack_power,
            "defense": base.defense,
            "dodge_chance": base.dodge_chance,
            "block_chance": base.block_chance,
            "crit_chance": base.crit_chance,
            "crit_multiplier": base.crit_multiplier,
        }

        if isinstance(player.weapon, WeaponItem):
            effective_stats["attack_power"] += player.weapon.attack_bonus
            effective_stats["crit_chance"] += player.weapon.crit_bonus

        if isinstance(player.armor, ArmorItem):
            effective_stats["defense"] += player.armor.defense_bonus
            effective_stats["dodge_chance"] += player.armor.dodge_bonus
            effective_stats["block_chance"] += player.armor.block_bonus

        # Chances are probabilities
        for stat_name in ("dodge_chance", "block_chance", "crit_chance"):
            effective_stats[stat_name] = min(effective_stats[stat_name], 1.0)

        effective_stats["health"] = min(max(player.current_stats.health, 0), effective_stats["max_health"])

        return CombatStats(**effective_stats)

    @staticmethod
    def refresh(player: Player) -> None:
        """Recompute ``player.current_stats`` in place after an equipment change."""
        player.current_stats = StatCalculator.calculate_current_stats(player)
