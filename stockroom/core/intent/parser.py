"""Command classifier for the stockroom interpreter.

Maps one line of free text to exactly one Command by trying the ordered
rules in `patterns.RULES`. Classification is pure: no I/O, no dependence
on the current inventory, and the same text always yields the same
Command. A line nothing matches becomes `Unknown`, which is a normal
outcome rather than an error.
"""

from __future__ import annotations

import logging

from .patterns import RULES, Rule, RuleContext
from .taxonomy import DEFAULT_LOW_STOCK_THRESHOLD, Command, Unknown

logger = logging.getLogger(__name__)

# Maximum input length considered by the rules
MAX_INPUT_LENGTH = 10_000


class CommandClassifier:
    """Ordered first-match-wins classifier.

    Attributes:
        rules: Rule functions in precedence order
        context: Settings passed to every rule
    """

    def __init__(
        self,
        default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        rules: tuple[Rule, ...] = RULES,
    ) -> None:
        """Initialize the classifier.

        Args:
            default_threshold: Low stock threshold when the text names none
            rules: Rule functions in precedence order
        """
        self.rules = rules
        self.context = RuleContext(default_threshold=default_threshold)

    def classify(self, text: str) -> Command:
        """Classify a line of user input.

        Args:
            text: Raw user input

        Returns:
            The Command produced by the first matching rule, or Unknown
        """
        text = text.strip()

        if not text:
            return Unknown()

        if len(text) > MAX_INPUT_LENGTH:
            logger.warning(f"Input truncated from {len(text)} to {MAX_INPUT_LENGTH} chars")
            text = text[:MAX_INPUT_LENGTH].rstrip()

        for rule in self.rules:
            try:
                command = rule(text, self.context)
            except Exception as e:
                logger.warning(f"Rule {rule.__name__} failed on input: {e}")
                continue
            if command is not None:
                logger.debug(f"Classified as {command.kind.value} by {rule.__name__}")
                return command

        return Unknown()


# Module-level instance for convenience
_classifier = CommandClassifier()


def classify(text: str) -> Command:
    """Classify text using the default classifier."""
    return _classifier.classify(text)


def create_classifier(default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> CommandClassifier:
    """Factory function to create a CommandClassifier."""
    return CommandClassifier(default_threshold=default_threshold)
