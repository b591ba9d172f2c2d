"""The shared pile of arrow tokens."""

ARROW_POOL_SIZE = 9


class ArrowPool:
    """Counter of arrow tokens left in the middle of the table.

    Tokens move from here to players as Arrow faces are rolled, and back when
    a player dies or discharges them with a Gatling. When the pile runs out
    the Indians attack and the pile is refilled.
    """

    def __init__(self, capacity: int = ARROW_POOL_SIZE):
        self.capacity = capacity
        self.remaining = capacity

    def take(self) -> bool:
        """Take one token from the pile.

        Returns:
            True if the pile is now empty and the attack must be resolved.
        """
        self.remaining -= 1
        return self.remaining <= 0

    def give_back(self, count: int) -> None:
        """Return forfeited tokens to the pile."""
        self.remaining += count

    def refill(self) -> None:
        """Reset the pile to full after an attack."""
        self.remaining = self.capacity

    @property
    def empty(self) -> bool:
        return self.remaining <= 0
