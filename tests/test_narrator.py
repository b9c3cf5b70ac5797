"""Tests for Narrator."""

from dungeonquest.engine.dice import Dice
from dungeonquest.engine.narrator import DEFAULT_COMMENTARY, Narrator

from conftest import ScriptedRandom


class TestNarrator:
    """Test suite for Narrator."""

    def test_fills_placeholders(self):
        """Test that context values replace their placeholders."""
        narrator = Narrator(dice=Dice(ScriptedRandom()))
        line = narrator.narrate("take", item="Iron Sword")
        assert line == "With a swift motion, they picked up the Iron Sword."

    def test_every_default_action_has_lines(self):
        """Test that the bundled commentary is never empty."""
        assert all(DEFAULT_COMMENTARY.values())

    def test_disabled_returns_none(self):
        """Test that a disabled narrator stays quiet."""
        assert Narrator(enabled=False).narrate("attack", enemy="Goblin") is None

    def test_unknown_action_returns_none(self):
        """Test actions without commentary."""
        assert Narrator().narrate("dance") is None

    def test_custom_commentary(self):
        """Test supplying a template set."""
        narrator = Narrator(commentary={"attack": ["{enemy} meets {weapon}!"]})
        assert narrator.narrate("attack", enemy="Troll", weapon="steel") == "Troll meets steel!"

    def test_unused_placeholders_stay(self):
        """Test that missing context leaves the placeholder in place."""
        narrator = Narrator(commentary={"move": ["Heading {direction}."]})
        assert narrator.narrate("move") == "Heading {direction}."
