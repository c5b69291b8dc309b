"""Data models for the parks demo."""

from dataclasses import dataclass


@dataclass
class Park:
    """A national park. Mutable so menus bound to it show edits live."""

    park_id: int
    name: str
    state: str

    def __str__(self) -> str:
        return f"{self.name}, {self.state}"
