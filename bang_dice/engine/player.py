"""Player state for the Bang! dice game."""

from dataclasses import dataclass, field

from .roles import Role, max_life_for, role_name


@dataclass(eq=False)
class Player:
    """A seat at the table.

    Players compare by identity: the engine hands out references to the same
    objects it owns and keys damage tallies by them.
    """

    name: str
    role: Role
    max_life: int = field(init=False)
    life: int = field(init=False)
    arrows: int = 0

    def __post_init__(self):
        """Start at full life for the role."""
        self.max_life = max_life_for(self.role)
        self.life = self.max_life

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def role_name(self) -> str:
        return role_name(self.role)

    def receive_damage(self, damage: int) -> None:
        """Lose life. Life may go below zero."""
        self.life -= damage

    def heal(self, amount: int) -> int:
        """Regain life, never above max_life.

        Returns:
            Life actually regained.
        """
        before = self.life
        self.life = min(self.life + amount, self.max_life)
        return self.life - before

    def add_arrow(self) -> None:
        """Take an arrow token."""
        self.arrows += 1

    def discard_arrows(self) -> int:
        """Drop all arrow tokens.

        Returns:
            The number of tokens dropped.
        """
        count = self.arrows
        self.arrows = 0
        return count

    def status_line(self, reveal_role: bool = True) -> str:
        """One-line summary: name, role, life and arrows."""
        role = self.role_name if reveal_role else "?"
        return f"{self.name} - {role} - {self.life}/{self.max_life} (Arrow: {self.arrows})"
