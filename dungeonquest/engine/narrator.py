"""Flavor text for player actions."""

from typing import Optional

from dungeonquest.engine.dice import Dice

DEFAULT_COMMENTARY: dict[str, list[str]] = {
    "move": [
        "The hero ventured {direction}, deeper into the unknown.",
        "With courage in their heart, they moved {direction}.",
    ],
    "attack": [
        "Steel rang out as the hero attacked the {enemy}!",
        "Fury guided their blade toward the {enemy}!",
    ],
    "take": [
        "With a swift motion, they picked up the {item}.",
        "The {item} was added to their growing collection.",
    ],
    "equip": ["Armed with the {item}, they felt more prepared for battle."],
    "flee": ["Discretion being the better part of valor, they fled the battle."],
    "solve": ["With a keen mind, they approached the {puzzle}."],
    "dodge": ["The {enemy} struck at nothing but air as the hero dodged!"],
    "block": ["Steel met steel as the hero blocked the {enemy}'s attack!"],
    "critical_hit": ["A devastating blow! The {enemy} reeled from the critical strike!"],
    "unlock": ["With a satisfying click, the way {direction} opened."],
    "death": ["And so, the hero's tale came to a tragic end..."],
    "victory": ["Against all odds, the hero emerged victorious!"],
}


class Narrator:
    """Picks a flavor line for an action and fills in its placeholders.

    Narration is never required for correctness: when disabled, or for an
    action without lines, ``narrate`` returns None.
    """

    def __init__(
        self,
        commentary: Optional[dict[str, list[str]]] = None,
        enabled: bool = True,
        dice: Optional[Dice] = None,
    ) -> None:
        self._commentary = DEFAULT_COMMENTARY if commentary is None else commentary
        self.enabled = enabled
        self._dice = dice or Dice()

    def narrate(self, action: str, **context: object) -> Optional[str]:
        if not self.enabled:
            return None
        variations = self._commentary.get(action)
        if not variations:
            return None

        template = self._dice.choice(variations)
        for key, value in context.items():
            template = template.replace("{" + key + "}", str(value))
        return template
