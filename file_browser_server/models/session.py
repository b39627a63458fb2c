from pathlib import Path

from pydantic import BaseModel, Field


class Session(BaseModel):
    """Stores the navigation state for a single connection."""

    label: str
    root: Path = Field(frozen=True)
    current: Path | None = None

    def model_post_init(self, __context) -> None:
        if self.current is None:
            self.current = self.root

    @property
    def at_root(self) -> bool:
        return self.current.resolve() == self.root.resolve()

    @property
    def directory_name(self) -> str:
        """Leaf name of the current directory, as shown in the prompt."""
        return self.current.name
